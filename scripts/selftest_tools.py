from __future__ import annotations
import json
import tempfile
from pathlib import Path

from simplemcp.app_context import AppContext
from simplemcp.config.models import ServerSettings

def main():
    with tempfile.TemporaryDirectory() as td:
        cwd = Path(td)
        (cwd / "a.txt").write_text("hello\n", encoding="utf-8")
        settings = ServerSettings(allowed_commands=frozenset({"echo hello", "ls"}), project_path=cwd)
        ctx = AppContext.from_settings(settings)

        calls = [
            ("get_documentation", {"query": "pathlib.Path"}),
            ("search_project", {"query": "main", "filePattern": "*.py"}),
            ("run_command", {"command": "echo", "args": ["hello"]}),
            ("run_command", {"command": "ls"}),
            # rejected: not an exact allow-list entry
            ("run_command", {"command": "ls", "args": ["-la"]}),
            # rejected: schema
            ("run_command", {}),
            ("no_such_tool", {}),
        ]
        for name, args in calls:
            res = ctx.dispatcher.call(name, args)
            print(f"== {name} {json.dumps(args)} -> {'error' if res.is_error else 'ok'}")
            print(res.joined_text)

if __name__ == "__main__":
    main()
