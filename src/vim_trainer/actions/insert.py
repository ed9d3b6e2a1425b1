"""Insert-mode edits: literal characters, Backspace and Enter."""

from __future__ import annotations

from vim_trainer.buffer import scanning
from vim_trainer.modes.base_mode import ModeContext, ModeResult

from .edits import edit_result


def insert_character(context: ModeContext, char: str) -> ModeResult:
    return edit_result(context.buffer.insert_text(char, label="insert_char"))


def backspace(context: ModeContext, match) -> ModeResult:
    del match
    buffer = context.buffer
    cursor = buffer.cursor
    if cursor == 0:
        return ModeResult(consumed=True, status="noop")
    return edit_result(
        buffer.delete_range(cursor - 1, cursor, label="backspace", cursor=cursor - 1)
    )


def newline(context: ModeContext, match) -> ModeResult:
    del match
    return insert_character(context, scanning.LINE_BREAK)


__all__ = ["insert_character", "backspace", "newline"]
