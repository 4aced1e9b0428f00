from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from simplemcp.app_context import AppContext
from simplemcp.config import loader
from simplemcp.config.models import ServerSettings
from simplemcp.util.log import ToolCallLog


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the user's global config and environment out of every test."""
    monkeypatch.setattr(loader, "_global_candidate_paths", lambda: [])
    for var in (loader.ENV_ALLOWED_COMMANDS, loader.ENV_PROJECT_PATH, loader.ENV_COMMAND_TIMEOUT):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def log_buffer() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def tool_log(log_buffer: io.StringIO) -> ToolCallLog:
    return ToolCallLog(Console(file=log_buffer, width=200, color_system=None))


@pytest.fixture
def make_app(tmp_path: Path, tool_log: ToolCallLog):
    def _make(allowed: tuple[str, ...] = (), timeout: float | None = 10.0, project: Path | None = None) -> AppContext:
        settings = ServerSettings(
            allowed_commands=frozenset(allowed),
            project_path=project or tmp_path,
            command_timeout=timeout,
        )
        return AppContext.from_settings(settings, log=tool_log)

    return _make
