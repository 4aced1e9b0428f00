from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ServerSettings:
    """Settings fixed at start-up and shared read-only by every request."""

    name: str = "simple-mcp-server"
    version: str = "1.0.0"
    allowed_commands: frozenset[str] = field(default_factory=frozenset)
    project_path: Path = field(default_factory=Path.cwd)
    command_timeout: float | None = 120.0

    loaded_from: Path | None = None
