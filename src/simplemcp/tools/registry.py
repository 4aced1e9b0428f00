from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from .base import Tool, ToolContext, ToolResult, ToolSpec
from .errors import DuplicateNameError, UnknownToolError
from .schema import check_spec

Handler = Callable[[ToolContext, dict[str, Any]], ToolResult]

@dataclass
class FunctionTool:
    """Adapts a plain handler function to the Tool protocol."""
    spec: ToolSpec
    handler: Handler

    def execute(self, ctx: ToolContext, args: dict[str, Any]) -> ToolResult:
        return self.handler(ctx, args)

@dataclass
class ToolRegistry:
    _tools: Dict[str, Tool] = None  # type: ignore

    def __post_init__(self):
        if self._tools is None:
            self._tools = {}

    def register(self, tool: Tool) -> None:
        name = tool.spec.name
        check_spec(tool.spec)
        if name in self._tools:
            raise DuplicateNameError(name)
        self._tools[name] = tool

    def add(self, spec: ToolSpec, handler: Handler) -> None:
        self.register(FunctionTool(spec=spec, handler=handler))

    def get(self, name: str) -> Tool:
        if name not in self._tools:
            raise UnknownToolError(name)
        return self._tools[name]

    def get_optional(self, name: str) -> Optional[Tool]:
        return self._tools.get(name)

    def list_specs(self) -> list[ToolSpec]:
        return [t.spec for t in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
