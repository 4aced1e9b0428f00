from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv
from platformdirs import user_config_dir

from .models import ConfigError, ServerSettings
from ..tools.permissions import parse_allow_list

APP_NAME = "simplemcp"

ENV_ALLOWED_COMMANDS = "ALLOWED_COMMANDS"
ENV_PROJECT_PATH = "PROJECT_PATH"
ENV_COMMAND_TIMEOUT = "SIMPLEMCP_COMMAND_TIMEOUT"


def _candidate_paths(cwd: Path) -> list[Path]:
    # project-level (higher priority)
    return [
        cwd / ".simplemcp.yaml",
        cwd / "simplemcp.yaml",
    ]


def _global_candidate_paths() -> list[Path]:
    cfg_dir = Path(user_config_dir(APP_NAME))
    return [cfg_dir / "simplemcp.yaml"]


def _load_yaml(p: Path) -> dict[str, Any]:
    try:
        obj = yaml.safe_load(p.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config {p}: {e}") from e
    if obj is None:
        return {}
    if not isinstance(obj, dict):
        raise ConfigError(f"Config {p} must contain a mapping at the top level.")
    return obj


def _timeout(value: Any, origin: str) -> float:
    try:
        t = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{origin}: command timeout must be a number, got {value!r}") from None
    if t <= 0:
        raise ConfigError(f"{origin}: command timeout must be positive, got {value!r}")
    return t


def _project_path(value: Any, cwd: Path, origin: str) -> Path:
    # Not checked for existence: a missing directory fails the run_command call, not start-up.
    if not isinstance(value, (str, Path)) or not str(value).strip():
        raise ConfigError(f"{origin}: project path must be a non-empty string")
    p = Path(str(value)).expanduser()
    if not p.is_absolute():
        p = cwd / p
    return p.resolve()


def _allowed(value: Any, origin: str) -> frozenset[str]:
    if value is None or isinstance(value, str):
        return parse_allow_list(value)
    if isinstance(value, list) and all(isinstance(x, str) for x in value):
        return parse_allow_list(value)
    raise ConfigError(f"{origin}: allowed_commands must be a list of strings or a comma separated string")


def load_settings(
    *,
    cwd: Path,
    explicit_path: Path | None = None,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> ServerSettings:
    """Build the server settings.

    Precedence: global YAML < project YAML < explicit YAML < environment <
    overrides (CLI flags). When env is None, os.environ is used after loading
    cwd/.env (already-set variables win over .env).
    """
    if env is None:
        load_dotenv(cwd / ".env", override=False)
        env = os.environ

    merged: dict[str, Any] = {}
    loaded_from: Path | None = None

    for p in _global_candidate_paths():
        if p.is_file():
            merged.update(_load_yaml(p))
            loaded_from = p

    for p in _candidate_paths(cwd):
        if p.is_file():
            merged.update(_load_yaml(p))
            loaded_from = p
            break  # first match wins for project-level

    if explicit_path is not None:
        p = explicit_path.expanduser().resolve()
        if not p.is_file():
            raise ConfigError(f"Config file not found: {p}")
        merged.update(_load_yaml(p))
        loaded_from = p

    origin = str(loaded_from) if loaded_from else "config"
    allowed: frozenset[str] = frozenset()
    project = cwd.resolve()
    timeout = 120.0

    if "allowed_commands" in merged:
        allowed = _allowed(merged["allowed_commands"], origin)
    if merged.get("project_path") is not None:
        project = _project_path(merged["project_path"], cwd, origin)
    if merged.get("command_timeout") is not None:
        timeout = _timeout(merged["command_timeout"], origin)

    if ENV_ALLOWED_COMMANDS in env:
        allowed = parse_allow_list(env[ENV_ALLOWED_COMMANDS])
    if env.get(ENV_PROJECT_PATH):
        project = _project_path(env[ENV_PROJECT_PATH], cwd, ENV_PROJECT_PATH)
    if env.get(ENV_COMMAND_TIMEOUT):
        timeout = _timeout(env[ENV_COMMAND_TIMEOUT], ENV_COMMAND_TIMEOUT)

    for k, v in (overrides or {}).items():
        if v is None:
            continue
        if k == "allowed_commands":
            allowed = _allowed(v, "--allow")
        elif k == "project_path":
            project = _project_path(v, cwd, "--project-path")
        elif k == "command_timeout":
            timeout = _timeout(v, "--timeout")
        else:
            raise ConfigError(f"Unknown setting: {k}")

    return ServerSettings(
        allowed_commands=allowed,
        project_path=project,
        command_timeout=timeout,
        loaded_from=loaded_from,
    )
