from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Protocol

@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    parameters: dict[str, Any]   # JSONSchema (type=object)

    def to_mcp(self) -> dict[str, Any]:
        return {"name": self.name, "description": self.description, "inputSchema": self.parameters}

class Tool(Protocol):
    spec: ToolSpec
    def execute(self, ctx: "ToolContext", args: dict[str, Any]) -> "ToolResult": ...

@dataclass(frozen=True)
class TextContent:
    text: str
    type: str = "text"

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type, "text": self.text}

@dataclass
class ToolResult:
    content: list[TextContent] = field(default_factory=list)
    is_error: bool = False

    @staticmethod
    def text(text: str, is_error: bool = False) -> "ToolResult":
        return ToolResult(content=[TextContent(text)], is_error=is_error)

    @property
    def joined_text(self) -> str:
        return "\n".join(c.text for c in self.content)

    def to_dict(self) -> dict[str, Any]:
        return {"content": [c.to_dict() for c in self.content], "isError": self.is_error}

@dataclass(frozen=True)
class Invocation:
    tool_name: str
    arguments: dict[str, Any] = field(default_factory=dict)

@dataclass
class ToolContext:
    # Working directory for tools that touch the project (run_command).
    cwd: str
