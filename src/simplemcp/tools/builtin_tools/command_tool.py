from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
import shlex
import subprocess

from ..base import ToolSpec, ToolResult, ToolContext
from ..errors import CommandExecutionError, CommandNotAllowedError
from ..permissions import CommandGate, join_command
from ...util.subprocess import run_cmd

@dataclass
class RunCommandTool:
    """Runs an allow-listed command in the project directory.

    The gate compares the space-joined command line; the process itself is
    spawned from an argument vector, so shell operators in an allowed entry
    are passed through as literal arguments.
    """

    gate: CommandGate = field(default_factory=CommandGate)
    timeout: float | None = 120
    spec: ToolSpec = ToolSpec(
        name="run_command",
        description="Run an allow-listed command in the project directory. Returns stdout and stderr.",
        parameters={
            "type": "object",
            "properties": {
                "command": {"type": "string", "description": "Command to run."},
                "args": {
                    "type": "array",
                    "items": {"type": "string"},
                    "default": [],
                    "description": "Command arguments.",
                },
            },
            "required": ["command"],
        },
    )

    def execute(self, ctx: ToolContext, args: dict[str, Any]) -> ToolResult:
        command = args["command"]
        cmd_args = list(args.get("args") or [])
        full = join_command(command, cmd_args)

        if not self.gate.decide(full):
            raise CommandNotAllowedError(full, self.gate.listing())

        try:
            argv = shlex.split(command) + cmd_args
        except ValueError as e:
            raise CommandExecutionError(full, f"cannot parse command: {e}") from e
        if not argv:
            raise CommandExecutionError(full, "empty command")

        try:
            res = run_cmd(argv, cwd=ctx.cwd, timeout=self.timeout)
        except subprocess.TimeoutExpired as e:
            raise CommandExecutionError(full, f"timed out after {self.timeout}s", stderr=_as_text(e.stderr)) from e
        except OSError as e:
            raise CommandExecutionError(full, str(e)) from e

        if res.returncode != 0:
            raise CommandExecutionError(full, f"exit code {res.returncode}", stderr=res.stderr, returncode=res.returncode)

        return ToolResult.text(
            f'Result of command "{full}":\n\n'
            f"STDOUT:\n{res.stdout}\n\n"
            f"STDERR:\n{res.stderr}"
        )

def _as_text(data: bytes | str | None) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data
