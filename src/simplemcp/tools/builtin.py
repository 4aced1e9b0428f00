from __future__ import annotations

from .registry import ToolRegistry
from .permissions import CommandGate
from .backends import DocumentationSource, ProjectSearcher

from .builtin_tools.docs_tool import GetDocumentationTool
from .builtin_tools.search_tool import SearchProjectTool
from .builtin_tools.command_tool import RunCommandTool

def register_builtin_tools(
    registry: ToolRegistry,
    gate: CommandGate,
    *,
    command_timeout: float | None = 120,
    docs: DocumentationSource | None = None,
    search: ProjectSearcher | None = None,
) -> None:
    registry.register(GetDocumentationTool(backend=docs) if docs else GetDocumentationTool())
    registry.register(SearchProjectTool(backend=search) if search else SearchProjectTool())
    registry.register(RunCommandTool(gate=gate, timeout=command_timeout))
