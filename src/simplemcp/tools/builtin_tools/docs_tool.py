from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from ..base import ToolSpec, ToolResult, ToolContext
from ..backends import DocumentationSource, PlaceholderDocumentationSource

@dataclass
class GetDocumentationTool:
    backend: DocumentationSource = field(default_factory=PlaceholderDocumentationSource)
    spec: ToolSpec = ToolSpec(
        name="get_documentation",
        description="Look up documentation for a package, class or function.",
        parameters={
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "What to look up (package/class/function)."},
                "source": {"type": "string", "default": "local", "description": "Documentation source (default: local)."},
            },
            "required": ["query"],
        },
    )

    def execute(self, ctx: ToolContext, args: dict[str, Any]) -> ToolResult:
        return ToolResult.text(self.backend.lookup(args["query"], args.get("source", "local")))
