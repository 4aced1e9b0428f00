from __future__ import annotations

from pathlib import Path
import json
from typing import Any, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.markup import escape
from rich.text import Text

from .app_context import AppContext
from .config.models import ConfigError
from .mcp.server import StdioServer
from .util.log import ToolCallLog


app = typer.Typer(add_completion=False, help="simplemcp: MCP stdio server exposing documentation, search and command tools.")
console = Console()


def _resolve_cwd(cwd: Path | None) -> Path:
    cwd = Path(str(cwd or Path.cwd())).expanduser().resolve()
    if not cwd.is_dir():
        raise typer.BadParameter(f"--cwd must be an existing directory, got: {cwd}")
    return cwd


def _overrides(project_path: Path | None, allow: list[str] | None, timeout: float | None) -> dict[str, Any]:
    return {
        "project_path": project_path,
        "allowed_commands": allow or None,
        "command_timeout": timeout,
    }


def _build_context(cwd: Path | None, config: Path | None, overrides: dict[str, Any], log: ToolCallLog) -> AppContext:
    try:
        return AppContext.from_env(cwd=_resolve_cwd(cwd), config_path=config, overrides=overrides, log=log)
    except ConfigError as e:
        log.fatal(str(e))
        raise typer.Exit(code=1)


def _serve(cwd: Path | None, config: Path | None, overrides: dict[str, Any]) -> None:
    log = ToolCallLog()
    ctx = _build_context(cwd, config, overrides, log)
    s = ctx.settings
    log.info(f"{s.name} {s.version} starting (project={s.project_path}, allowed commands={len(s.allowed_commands)})")
    try:
        server = StdioServer(ctx)
        log.info("server ready on stdio")
        server.serve()
    except KeyboardInterrupt:
        pass
    except OSError as e:
        log.fatal(f"stdio transport failed: {e}")
        raise typer.Exit(code=1)
    log.info("stdin closed, shutting down")


@app.callback(invoke_without_command=True)
def _default(ctx: typer.Context):
    # Agent hosts usually launch the bare command; treat that as `serve`.
    if ctx.invoked_subcommand is None:
        _serve(None, None, {})


@app.command()
def serve(
    cwd: Path = typer.Option(None, "--cwd", help="Directory used to discover .env and simplemcp.yaml. Defaults to current directory."),
    config: Path = typer.Option(None, "--config", help="Explicit YAML config path."),
    project_path: Path = typer.Option(None, "--project-path", help="Working directory for run_command (overrides PROJECT_PATH)."),
    allow: Optional[list[str]] = typer.Option(None, "--allow", help="Allowed full command; repeatable (overrides ALLOWED_COMMANDS)."),
    timeout: float = typer.Option(None, "--timeout", help="run_command timeout in seconds (default 120)."),
):
    """Serve tools over JSON-RPC on stdin/stdout."""
    _serve(cwd, config, _overrides(project_path, allow, timeout))


@app.command()
def tools(
    cwd: Path = typer.Option(None, "--cwd", help="Directory used to discover .env and simplemcp.yaml. Defaults to current directory."),
    config: Path = typer.Option(None, "--config", help="Explicit YAML config path."),
):
    """List registered tools and their parameters."""
    ctx = _build_context(cwd, config, {}, ToolCallLog())

    table = Table(title="tools")
    table.add_column("name", style="bold")
    table.add_column("parameters")
    table.add_column("description")
    for spec in ctx.tools.list_specs():
        props = spec.parameters.get("properties", {})
        required = set(spec.parameters.get("required", []))
        params = ", ".join(f"{k}{'' if k in required else '?'}: {v.get('type', 'any')}" for k, v in props.items())
        table.add_row(spec.name, params, spec.description)
    console.print(table)

    allowed = ", ".join(ctx.gate.listing()) or "(none)"
    console.print(f"[bold]allowed commands:[/bold] {escape(allowed)}", highlight=False)


@app.command()
def call(
    name: str = typer.Argument(..., help="Tool name."),
    arg: Optional[list[str]] = typer.Option(None, "--arg", "-A", help="String argument as key=value; repeatable."),
    json_args: str = typer.Option(None, "--json", help="Arguments as a JSON object (merged under --arg)."),
    cwd: Path = typer.Option(None, "--cwd", help="Directory used to discover .env and simplemcp.yaml. Defaults to current directory."),
    config: Path = typer.Option(None, "--config", help="Explicit YAML config path."),
    project_path: Path = typer.Option(None, "--project-path", help="Working directory for run_command."),
    allow: Optional[list[str]] = typer.Option(None, "--allow", help="Allowed full command; repeatable."),
    timeout: float = typer.Option(None, "--timeout", help="run_command timeout in seconds."),
):
    """Invoke one tool locally and print its result."""
    args: dict[str, Any] = {}
    if json_args:
        try:
            parsed = json.loads(json_args)
        except json.JSONDecodeError as e:
            raise typer.BadParameter(f"--json is not valid JSON: {e}")
        if not isinstance(parsed, dict):
            raise typer.BadParameter("--json must be a JSON object")
        args.update(parsed)
    for it in (arg or []):
        if "=" not in it:
            raise typer.BadParameter(f"--arg expects key=value, got: {it}")
        k, v = it.split("=", 1)
        args[k.strip()] = v

    ctx = _build_context(cwd, config, _overrides(project_path, allow, timeout), ToolCallLog())
    res = ctx.dispatcher.call(name, args)
    console.print(
        Panel.fit(
            Text(res.joined_text),
            title=f"result: {name} ({'error' if res.is_error else 'ok'})",
            border_style="red" if res.is_error else "green",
        )
    )
    if res.is_error:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
