"""High-level buffer façade combining document, state, register, and undo."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Optional

from vim_trainer.runtime import telemetry

from . import scanning
from .document import BufferDocument
from .registers import Register
from .state import BufferState, Cursor, Selection
from .undo import UndoEntry, UndoHistory
from .validation import ensure_cursor


@dataclass(slots=True)
class BufferView:
    version: int
    text: str
    cursor: Cursor
    selection: Optional[Selection]


@dataclass(slots=True)
class BufferDelta:
    version: int
    text: str
    cursor: Cursor
    label: str
    changed: bool


class Buffer:
    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        registers: Optional[Register] = None,
        undo: Optional[UndoHistory] = None,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        ensure_cursor(self.document, self.state.cursor)
        self.registers = registers or Register()
        self.undo = undo or UndoHistory(
            UndoEntry(label="seed", text=self.document.text, cursor=self.state.cursor)
        )

    @classmethod
    def from_text(
        cls, text: str, *, cursor: Cursor = 0, name: str = "default"
    ) -> "Buffer":
        return cls(
            name=name,
            document=BufferDocument.from_text(text),
            state=BufferState(cursor=cursor),
        )

    @property
    def text(self) -> str:
        return self.document.text

    @property
    def cursor(self) -> Cursor:
        return self.state.cursor

    def move_cursor(self, cursor: Cursor) -> Cursor:
        clamped = scanning.clamp_cursor(self.document.text, cursor)
        self.state.set_cursor(clamped)
        return clamped

    def snapshot(self) -> BufferView:
        return BufferView(
            version=self.document.version,
            text=self.document.text,
            cursor=self.state.cursor,
            selection=self.state.selection,
        )

    def replace_text(
        self, text: str, *, cursor: Cursor, label: str
    ) -> BufferDelta:
        """Swap in edited text, snapshotting the previous state for undo.

        Identical text is not an edit: the cursor still moves but no undo
        entry is recorded and the version stays put.
        """

        if text == self.document.text:
            self.move_cursor(cursor)
            return self._delta(label, changed=False)

        with Transaction(self, label) as tx:
            tx.capture()
            self.document = self.document.replace(text)
            self.move_cursor(cursor)
        return self._delta(label, changed=True)

    def replace_range(
        self,
        start: Cursor,
        end: Cursor,
        text: str,
        *,
        label: str,
        cursor: Optional[Cursor] = None,
    ) -> BufferDelta:
        without, start = scanning.delete_range(self.document.text, start, end)
        updated, after = scanning.insert_at(without, start, text)
        return self.replace_text(
            updated, cursor=after if cursor is None else cursor, label=label
        )

    def insert_text(
        self,
        text: str,
        *,
        offset: Optional[Cursor] = None,
        label: str = "insert_text",
        cursor: Optional[Cursor] = None,
    ) -> BufferDelta:
        position = self.state.cursor if offset is None else offset
        return self.replace_range(position, position, text, label=label, cursor=cursor)

    def delete_range(
        self,
        start: Cursor,
        end: Cursor,
        *,
        label: str = "delete_range",
        cursor: Optional[Cursor] = None,
    ) -> BufferDelta:
        return self.replace_range(start, end, "", label=label, cursor=cursor)

    def get_text_range(self, start: Cursor, end: Cursor) -> str:
        text = self.document.text
        start, end = sorted(
            (scanning.clamp_cursor(text, start), scanning.clamp_cursor(text, end))
        )
        return text[start:end]

    def undo_last(self) -> Optional[UndoEntry]:
        """Restore the newest pre-edit snapshot; ``None`` at the seed."""

        entry = self.undo.undo()
        if entry is None:
            return None
        with telemetry.span(
            "buffer::undo",
            component=True,
            metadata={"buffer": self.name, "label": entry.label},
        ):
            self.document = self.document.replace(entry.text)
            self.move_cursor(entry.cursor)
        return entry

    def _delta(self, label: str, *, changed: bool) -> BufferDelta:
        return BufferDelta(
            version=self.document.version,
            text=self.document.text,
            cursor=self.state.cursor,
            label=label,
            changed=changed,
        )


class Transaction(AbstractContextManager["Transaction"]):
    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def capture(self) -> UndoEntry:
        entry = UndoEntry(
            label=self.label,
            text=self.buffer.document.text,
            cursor=self.buffer.state.cursor,
        )
        self.buffer.undo.push(entry)
        return entry

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False
