"""Load-time checks for buffers."""

from __future__ import annotations

from .document import BufferDocument
from .state import Cursor


class BufferValidationError(RuntimeError):
    """Raised when a buffer is loaded with an out-of-bounds cursor."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor


def ensure_cursor(document: BufferDocument, cursor: Cursor) -> Cursor:
    if cursor < 0 or cursor > document.length:
        raise BufferValidationError(
            f"Cursor {cursor} outside buffer of length {document.length}",
            cursor=cursor,
        )
    return cursor
