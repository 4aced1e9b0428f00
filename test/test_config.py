from __future__ import annotations

from pathlib import Path

import pytest

from simplemcp.config import loader
from simplemcp.config.loader import load_settings
from simplemcp.config.models import ConfigError


def write(p: Path, text: str) -> Path:
    p.write_text(text, encoding="utf-8")
    return p


def test_defaults(tmp_path: Path) -> None:
    s = load_settings(cwd=tmp_path, env={})
    assert s.allowed_commands == frozenset()
    assert s.project_path == tmp_path.resolve()
    assert s.command_timeout == 120.0
    assert s.loaded_from is None


def test_env_values(tmp_path: Path) -> None:
    sub = tmp_path / "proj"
    sub.mkdir()
    s = load_settings(
        cwd=tmp_path,
        env={"ALLOWED_COMMANDS": "echo hello,npm test", "PROJECT_PATH": "proj", "SIMPLEMCP_COMMAND_TIMEOUT": "7.5"},
    )
    assert s.allowed_commands == {"echo hello", "npm test"}
    assert s.project_path == sub.resolve()
    assert s.command_timeout == 7.5


def test_project_yaml(tmp_path: Path) -> None:
    write(tmp_path / "simplemcp.yaml", "allowed_commands:\n  - git status\n  - npm test\ncommand_timeout: 30\n")
    s = load_settings(cwd=tmp_path, env={})
    assert s.allowed_commands == {"git status", "npm test"}
    assert s.command_timeout == 30.0
    assert s.loaded_from == tmp_path / "simplemcp.yaml"


def test_dot_file_wins_over_plain_project_file(tmp_path: Path) -> None:
    write(tmp_path / ".simplemcp.yaml", "allowed_commands: a\n")
    write(tmp_path / "simplemcp.yaml", "allowed_commands: b\n")
    assert load_settings(cwd=tmp_path, env={}).allowed_commands == {"a"}


def test_precedence(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    glob_dir = tmp_path / "global"
    glob_dir.mkdir()
    g = write(glob_dir / "simplemcp.yaml", "allowed_commands: from-global\ncommand_timeout: 5\n")
    monkeypatch.setattr(loader, "_global_candidate_paths", lambda: [g])

    proj = tmp_path / "proj"
    proj.mkdir()
    write(proj / "simplemcp.yaml", "allowed_commands: from-project\n")
    explicit = write(tmp_path / "explicit.yaml", "allowed_commands: from-explicit\n")

    assert load_settings(cwd=proj, env={}).allowed_commands == {"from-project"}
    assert load_settings(cwd=proj, env={}).command_timeout == 5.0
    assert load_settings(cwd=proj, explicit_path=explicit, env={}).allowed_commands == {"from-explicit"}

    env = {"ALLOWED_COMMANDS": "from-env"}
    assert load_settings(cwd=proj, explicit_path=explicit, env=env).allowed_commands == {"from-env"}
    s = load_settings(cwd=proj, explicit_path=explicit, env=env, overrides={"allowed_commands": ["from-cli"]})
    assert s.allowed_commands == {"from-cli"}


def test_empty_env_clears_yaml_allow_list(tmp_path: Path) -> None:
    write(tmp_path / "simplemcp.yaml", "allowed_commands: [ls]\n")
    assert load_settings(cwd=tmp_path, env={"ALLOWED_COMMANDS": ""}).allowed_commands == frozenset()


def test_none_overrides_are_ignored(tmp_path: Path) -> None:
    s = load_settings(cwd=tmp_path, env={"ALLOWED_COMMANDS": "ls"}, overrides={"allowed_commands": None, "command_timeout": None})
    assert s.allowed_commands == {"ls"}
    assert s.command_timeout == 120.0


def test_dotenv_is_loaded(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    # register the variable with monkeypatch so the value load_dotenv sets is undone
    monkeypatch.setenv("ALLOWED_COMMANDS", "placeholder")
    monkeypatch.delenv("ALLOWED_COMMANDS")
    write(tmp_path / ".env", "ALLOWED_COMMANDS=echo from-dotenv\n")
    s = load_settings(cwd=tmp_path)
    assert s.allowed_commands == {"echo from-dotenv"}


@pytest.mark.parametrize(
    "content",
    [
        "- just\n- a list\n",
        "allowed_commands: {a: 1}\n",
        "command_timeout: soon\n",
        "command_timeout: 0\n",
        "key: [unclosed\n",
    ],
)
def test_bad_yaml_values(tmp_path: Path, content: str) -> None:
    write(tmp_path / "simplemcp.yaml", content)
    with pytest.raises(ConfigError):
        load_settings(cwd=tmp_path, env={})


def test_missing_project_path_is_accepted(tmp_path: Path) -> None:
    s = load_settings(cwd=tmp_path, env={"PROJECT_PATH": "does/not/exist"})
    assert s.project_path == (tmp_path / "does" / "not" / "exist").resolve()
    assert not s.project_path.exists()


def test_missing_explicit_config(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_settings(cwd=tmp_path, explicit_path=tmp_path / "nope.yaml", env={})


def test_bad_env_timeout(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="SIMPLEMCP_COMMAND_TIMEOUT"):
        load_settings(cwd=tmp_path, env={"SIMPLEMCP_COMMAND_TIMEOUT": "-1"})


def test_unknown_override(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_settings(cwd=tmp_path, env={}, overrides={"colour": "blue"})
