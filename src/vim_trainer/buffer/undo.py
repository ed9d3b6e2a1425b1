"""Seeded, append-only undo history."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .state import Cursor


@dataclass(frozen=True, slots=True)
class UndoEntry:
    """Buffer text and cursor captured right before an edit."""

    label: str
    text: str
    cursor: Cursor


class UndoHistory:
    """Stack of pre-edit snapshots sitting on top of an exercise seed.

    The seed entry is never popped, so ``undo`` past it is a no-op.
    There is no redo.
    """

    def __init__(self, seed: UndoEntry) -> None:
        self._entries: List[UndoEntry] = [seed]

    def push(self, entry: UndoEntry) -> None:
        self._entries.append(entry)

    def can_undo(self) -> bool:
        return len(self._entries) > 1

    def undo(self) -> Optional[UndoEntry]:
        if not self.can_undo():
            return None
        return self._entries.pop()

    @property
    def seed(self) -> UndoEntry:
        return self._entries[0]

    @property
    def entries(self) -> tuple[UndoEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
