from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from ..base import ToolSpec, ToolResult, ToolContext
from ..backends import PlaceholderProjectSearcher, ProjectSearcher

@dataclass
class SearchProjectTool:
    backend: ProjectSearcher = field(default_factory=PlaceholderProjectSearcher)
    spec: ToolSpec = ToolSpec(
        name="search_project",
        description="Search project files for a query.",
        parameters={
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Search query."},
                "filePattern": {"type": "string", "default": "*", "description": "File glob to search, e.g. *.py"},
            },
            "required": ["query"],
        },
    )

    def execute(self, ctx: ToolContext, args: dict[str, Any]) -> ToolResult:
        return ToolResult.text(self.backend.search(args["query"], args.get("filePattern", "*")))
