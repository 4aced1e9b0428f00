from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from .config.loader import load_settings
from .config.models import ServerSettings
from .tools.backends import DocumentationSource, ProjectSearcher
from .tools.base import ToolContext
from .tools.builtin import register_builtin_tools
from .tools.dispatch import ToolDispatcher
from .tools.permissions import CommandGate
from .tools.registry import ToolRegistry
from .util.log import ToolCallLog

@dataclass
class AppContext:
    settings: ServerSettings
    tools: ToolRegistry
    gate: CommandGate
    dispatcher: ToolDispatcher
    log: ToolCallLog

    @staticmethod
    def from_settings(
        settings: ServerSettings,
        *,
        log: ToolCallLog | None = None,
        docs: DocumentationSource | None = None,
        search: ProjectSearcher | None = None,
    ) -> "AppContext":
        log = log or ToolCallLog()
        gate = CommandGate(allowed=settings.allowed_commands)

        tools = ToolRegistry()
        register_builtin_tools(
            tools,
            gate,
            command_timeout=settings.command_timeout,
            docs=docs,
            search=search,
        )

        dispatcher = ToolDispatcher(tools, ToolContext(cwd=str(settings.project_path)), log=log)
        return AppContext(settings=settings, tools=tools, gate=gate, dispatcher=dispatcher, log=log)

    @staticmethod
    def from_env(
        cwd: Path,
        config_path: Path | None = None,
        overrides: Mapping[str, Any] | None = None,
        log: ToolCallLog | None = None,
    ) -> "AppContext":
        settings = load_settings(cwd=cwd, explicit_path=config_path, overrides=overrides)
        return AppContext.from_settings(settings, log=log)
