"""Cursor and visual anchor tracking for buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

Cursor = int  # flat character offset
Selection = Tuple[Cursor, Cursor]


@dataclass(slots=True)
class BufferState:
    """Mutable cursor + visual anchor tied to a BufferDocument version."""

    cursor: Cursor = 0
    anchor: Optional[Cursor] = None

    def set_cursor(self, cursor: Cursor) -> None:
        self.cursor = cursor

    def set_anchor(self, anchor: Cursor) -> None:
        self.anchor = anchor

    def clear_anchor(self) -> None:
        self.anchor = None

    @property
    def selection(self) -> Optional[Selection]:
        if self.anchor is None:
            return None
        return (min(self.anchor, self.cursor), max(self.anchor, self.cursor))
