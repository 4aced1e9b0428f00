from __future__ import annotations


class ToolError(RuntimeError):
    """Base class for failures surfaced to the caller as error results."""


class UnknownToolError(ToolError, KeyError):
    def __init__(self, name: object):
        super().__init__(f"Unknown tool: {name}")
        self.name = name

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class DuplicateNameError(ToolError, ValueError):
    def __init__(self, name: str):
        super().__init__(f"Tool already registered: {name}")
        self.name = name


class ValidationError(ToolError, ValueError):
    pass


class CommandNotAllowedError(ToolError):
    def __init__(self, full_command: str, allowed: list[str]):
        listed = ", ".join(allowed) if allowed else "(none)"
        super().__init__(f'Command "{full_command}" is not allowed. Allowed commands: {listed}')
        self.full_command = full_command
        self.allowed = allowed


class CommandExecutionError(ToolError):
    def __init__(self, full_command: str, detail: str, stderr: str = "", returncode: int | None = None):
        msg = f'Command "{full_command}" failed: {detail}'
        if stderr:
            msg += f"\n\nSTDERR:\n{stderr}"
        super().__init__(msg)
        self.full_command = full_command
        self.detail = detail
        self.stderr = stderr
        self.returncode = returncode
