from __future__ import annotations

from typing import Protocol


class DocumentationSource(Protocol):
    """Looks up documentation for a package, class or function."""

    def lookup(self, query: str, source: str) -> str: ...


class ProjectSearcher(Protocol):
    """Searches project files matching a glob pattern."""

    def search(self, query: str, file_pattern: str) -> str: ...


class PlaceholderDocumentationSource:
    """Stand-in used until a real documentation backend is plugged in.

    Returns templated text only; it never reads files or the network.
    """

    def lookup(self, query: str, source: str) -> str:
        return (
            f'Documentation for "{query}":\n\n'
            f"This is placeholder documentation for {query}.\n"
            "Documentation lookup is not implemented yet; no documentation backend is configured.\n"
            f"Source: {source}"
        )


class PlaceholderProjectSearcher:
    """Stand-in used until a real project search backend is plugged in."""

    def search(self, query: str, file_pattern: str) -> str:
        return (
            f'Search results for "{query}" in files {file_pattern}:\n'
            "(placeholder results: project search is not implemented yet, these matches are examples)\n\n"
            f"1. src/index.js:15 - // Example usage of {query}\n"
            f"2. src/utils.js:8 - function {query}() {{ ... }}\n"
            f"3. tests/{query}.test.js:22 - test('{query} functionality', () => {{ ... }})"
        )
