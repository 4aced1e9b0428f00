from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.markup import escape

# stdout is the protocol channel; diagnostics always go to stderr.
console = Console(stderr=True)


class ToolCallLog:
    """Writes one line per tool invocation and one per outcome."""

    def __init__(self, out: Console | None = None):
        self.out = out or console

    def call(self, tool_name: str, params: Any) -> None:
        try:
            rendered = json.dumps(params, ensure_ascii=False, sort_keys=True)
        except (TypeError, ValueError):
            rendered = repr(params)
        self.out.print(f"[cyan]\\[MCP][/cyan] call [bold]{escape(str(tool_name))}[/bold] {escape(rendered)}", highlight=False, soft_wrap=True)

    def result(self, tool_name: str, is_error: bool, detail: str = "") -> None:
        name = escape(str(tool_name))
        if is_error:
            msg = detail.replace("\n", " | ")
            self.out.print(f"[cyan]\\[MCP][/cyan] result [bold]{name}[/bold]: [red]error[/red] {escape(msg)}", highlight=False, soft_wrap=True)
        else:
            self.out.print(f"[cyan]\\[MCP][/cyan] result [bold]{name}[/bold]: [green]success[/green]", highlight=False, soft_wrap=True)

    def info(self, message: str) -> None:
        self.out.print(f"[cyan]\\[MCP][/cyan] {escape(message)}", highlight=False, soft_wrap=True)

    def fatal(self, message: str) -> None:
        self.out.print(f"[red]\\[MCP] fatal:[/red] {escape(message)}", highlight=False, soft_wrap=True)
