from __future__ import annotations

import builtins
import io
import os
import pathlib
import socket
import subprocess

import pytest

from simplemcp.app_context import AppContext
from simplemcp.config.models import ServerSettings


@pytest.fixture
def app(make_app) -> AppContext:
    return make_app()


@pytest.fixture
def no_io(app: AppContext, monkeypatch: pytest.MonkeyPatch) -> None:
    """Fail on any process, socket or file access once the app is built."""

    def forbidden(*a, **kw):
        raise AssertionError("placeholder tools must not do I/O")

    monkeypatch.setattr(subprocess, "run", forbidden)
    monkeypatch.setattr(subprocess, "Popen", forbidden)
    monkeypatch.setattr(socket, "socket", forbidden)
    monkeypatch.setattr(builtins, "open", forbidden)
    monkeypatch.setattr(io, "open", forbidden)
    monkeypatch.setattr(pathlib.Path, "open", forbidden)
    monkeypatch.setattr(os, "scandir", forbidden)
    monkeypatch.setattr(os, "listdir", forbidden)
    monkeypatch.setattr(os, "walk", forbidden)


def test_io_guard_trips_on_file_reads(no_io, tmp_path) -> None:
    with pytest.raises(AssertionError, match="must not do I/O"):
        open(tmp_path / "x.txt")
    with pytest.raises(AssertionError, match="must not do I/O"):
        (tmp_path / "x.txt").open()


def test_get_documentation_text(app, no_io) -> None:
    res = app.dispatcher.call("get_documentation", {"query": "Foo"})
    assert not res.is_error
    text = res.joined_text
    assert text.startswith('Documentation for "Foo":')
    assert "not implemented" in text
    assert text.endswith("Source: local")


def test_get_documentation_custom_source(app, no_io) -> None:
    res = app.dispatcher.call("get_documentation", {"query": "Foo", "source": "pypi"})
    assert res.joined_text.endswith("Source: pypi")


def test_search_project_text(app, no_io) -> None:
    res = app.dispatcher.call("search_project", {"query": "Foo", "filePattern": "*.py"})
    assert not res.is_error
    text = res.joined_text
    assert text.startswith('Search results for "Foo" in files *.py:')
    assert "placeholder" in text
    assert "function Foo() { ... }" in text
    assert "tests/Foo.test.js:22" in text


@pytest.mark.parametrize(
    "tool,args",
    [("get_documentation", {"query": "Foo"}), ("search_project", {"query": "Foo"})],
)
def test_placeholders_are_deterministic(app, no_io, tool: str, args: dict) -> None:
    first = app.dispatcher.call(tool, dict(args))
    second = app.dispatcher.call(tool, dict(args))
    assert first.to_dict() == second.to_dict()


def test_search_default_pattern(app, no_io) -> None:
    res = app.dispatcher.call("search_project", {"query": "Foo"})
    assert 'in files *:' in res.joined_text


def test_query_is_required(make_app) -> None:
    res = make_app().dispatcher.call("search_project", {"filePattern": "*.js"})
    assert res.is_error
    assert "query" in res.joined_text


def test_backends_are_pluggable(tmp_path) -> None:
    class FakeDocs:
        def lookup(self, query: str, source: str) -> str:
            return f"{source}:{query}"

    class FakeSearch:
        def search(self, query: str, file_pattern: str) -> str:
            return f"{file_pattern}:{query}"

    app = AppContext.from_settings(ServerSettings(project_path=tmp_path), docs=FakeDocs(), search=FakeSearch())
    assert app.dispatcher.call("get_documentation", {"query": "x"}).joined_text == "local:x"
    assert app.dispatcher.call("search_project", {"query": "x"}).joined_text == "*:x"
