from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence


def join_command(command: str, args: Sequence[str] = ()) -> str:
    """The string an allow-list entry must equal: command, then args joined by single spaces."""
    if args:
        return f"{command} {' '.join(args)}"
    return command


def parse_allow_list(raw: str | Iterable[str] | None) -> frozenset[str]:
    """Build an allow-list from a comma separated string or a list of entries.

    Entries are kept verbatim, surrounding whitespace included ("a, b" admits
    " b", not "b"). Only empty entries are dropped.
    """
    if raw is None:
        return frozenset()
    items = raw.split(",") if isinstance(raw, str) else [str(x) for x in raw]
    return frozenset(s for s in items if s)


@dataclass(frozen=True)
class CommandGate:
    """Exact-match allow-list for full command strings.

    No prefix, glob or whitespace normalization: "ls -la" does not admit
    "ls -la /tmp" or "ls  -la".
    """

    allowed: frozenset[str] = field(default_factory=frozenset)

    @staticmethod
    def from_config(raw: str | Iterable[str] | None) -> "CommandGate":
        return CommandGate(allowed=parse_allow_list(raw))

    def decide(self, full_command: str) -> bool:
        return full_command in self.allowed

    def listing(self) -> list[str]:
        return sorted(self.allowed)
