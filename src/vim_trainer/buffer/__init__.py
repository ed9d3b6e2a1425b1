"""Buffer/cursor engine: text scans, document, register and undo history."""

from .buffer import Buffer, BufferDelta, BufferView, Transaction
from .document import BufferDocument
from .registers import Register, RegisterValue
from .scanning import LineInfo
from .state import BufferState
from .undo import UndoEntry, UndoHistory
from .validation import BufferValidationError, ensure_cursor

__all__ = [
    "BufferDocument",
    "BufferState",
    "Register",
    "RegisterValue",
    "UndoHistory",
    "UndoEntry",
    "Buffer",
    "BufferDelta",
    "BufferView",
    "Transaction",
    "BufferValidationError",
    "LineInfo",
    "ensure_cursor",
]
