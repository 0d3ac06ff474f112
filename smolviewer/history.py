"""Navigation history: a bounded list of visited addresses with a cursor.

This module has no UI or network concerns. The navigation controller owns
one ``HistoryManager`` and is its only writer.
"""

from __future__ import annotations

from dataclasses import dataclass

from .address import Address, ProtocolKind
from .errors import EmptyHistory, NoHistory

MAX_HISTORY_ENTRIES = 256


@dataclass(frozen=True)
class HistoryEntry:
    """Rendered (address-bar) address plus the kind used to parse it."""

    address: Address
    protocol_kind: ProtocolKind

    def display_text(self) -> str:
        return self.address.display_text()


class HistoryManager:
    """Linear back/forward history over ``HistoryEntry`` values.

    With ``truncate_forward`` (the default) recording a new entry while the
    cursor is mid-list drops everything after the cursor, like a web
    browser. Without it entries are always appended and forward entries
    survive, matching the append-only behavior of older clients.
    """

    def __init__(self, max_entries: int = MAX_HISTORY_ENTRIES, truncate_forward: bool = True) -> None:
        self.max_entries = max(1, max_entries)
        self.truncate_forward = truncate_forward
        self._entries: list[HistoryEntry] = []
        self._cursor = -1

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    def add_entry(self, address: Address, protocol_kind: ProtocolKind | None = None) -> HistoryEntry:
        """Record a navigation and move the cursor onto it."""
        entry = HistoryEntry(address, protocol_kind or address.protocol_kind)
        if self.truncate_forward:
            del self._entries[self._cursor + 1:]
        self._entries.append(entry)
        overflow = len(self._entries) - self.max_entries
        if overflow > 0:
            del self._entries[:overflow]
        self._cursor = len(self._entries) - 1
        return entry

    def can_go_back(self) -> bool:
        return self._cursor > 0

    def can_go_forward(self) -> bool:
        return self._cursor < len(self._entries) - 1

    def step(self, offset: int) -> HistoryEntry:
        """Move the cursor by ``offset``; raises ``NoHistory`` if out of range."""
        target = self._cursor + offset
        if not self._entries or not 0 <= target < len(self._entries):
            raise NoHistory(f"cannot move {offset:+d} from position {self._cursor}")
        self._cursor = target
        return self._entries[target]

    def go_back(self) -> HistoryEntry | None:
        """Step back one entry; a no-op returning ``None`` at the start."""
        if not self.can_go_back():
            return None
        return self.step(-1)

    def go_forward(self) -> HistoryEntry | None:
        """Step forward one entry; a no-op returning ``None`` at the end."""
        if not self.can_go_forward():
            return None
        return self.step(1)

    def current(self) -> HistoryEntry:
        if not self._entries:
            raise EmptyHistory("history is empty")
        return self._entries[self._cursor]


__all__ = [
    "HistoryEntry",
    "HistoryManager",
    "MAX_HISTORY_ENTRIES",
]
