from __future__ import annotations

from typing import Any

from .base import Invocation, ToolContext, ToolResult
from .errors import ToolError
from .registry import ToolRegistry
from .schema import normalize_arguments
from ..util.log import ToolCallLog


class ToolDispatcher:
    """Resolves an invocation against the registry and always returns a ToolResult.

    Every failure along the way (unknown name, bad arguments, handler errors
    or unexpected exceptions) is turned into an error result; nothing is
    raised to the caller.
    """

    def __init__(self, registry: ToolRegistry, ctx: ToolContext, log: ToolCallLog | None = None):
        self.registry = registry
        self.ctx = ctx
        self.log = log or ToolCallLog()

    def dispatch(self, invocation: Invocation) -> ToolResult:
        name = invocation.tool_name
        self.log.call(name, invocation.arguments)
        try:
            res = self._run(name, invocation.arguments)
        except ToolError as e:
            res = ToolResult.text(str(e), is_error=True)
        except Exception as e:
            res = ToolResult.text(f"Tool {name} exception: {e}", is_error=True)

        self.log.result(name, res.is_error, res.joined_text if res.is_error else "")
        return res

    def call(self, name: str, arguments: dict[str, Any] | None = None) -> ToolResult:
        return self.dispatch(Invocation(tool_name=name, arguments=arguments or {}))

    def _run(self, name: str, arguments: Any) -> ToolResult:
        tool = self.registry.get(name)
        args = normalize_arguments(tool.spec, arguments)
        res = tool.execute(self.ctx, args)
        if not isinstance(res, ToolResult):
            raise TypeError(f"tool returned {type(res).__name__}, expected ToolResult")
        return res
