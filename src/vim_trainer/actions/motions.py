"""Cursor motions: ``h j k l w b e``."""

from __future__ import annotations

from typing import Callable

from vim_trainer.buffer import scanning
from vim_trainer.modes.base_mode import ModeContext, ModeResult

Scan = Callable[[str, int], int]


def _move(context: ModeContext, scan: Scan) -> ModeResult:
    buffer = context.buffer
    buffer.move_cursor(scan(buffer.text, buffer.cursor))
    if buffer.state.anchor is not None:
        context.bus.emit("visual.selection", buffer.state.selection)
    return ModeResult(consumed=True, status="motion")


def move_left(context: ModeContext, match) -> ModeResult:
    del match
    return _move(context, lambda text, cursor: cursor - 1)


def move_right(context: ModeContext, match) -> ModeResult:
    del match
    return _move(context, lambda text, cursor: cursor + 1)


def move_down(context: ModeContext, match) -> ModeResult:
    del match
    return _move(context, scanning.line_below)


def move_up(context: ModeContext, match) -> ModeResult:
    del match
    return _move(context, scanning.line_above)


def word_forward(context: ModeContext, match) -> ModeResult:
    del match
    return _move(context, scanning.word_forward)


def word_backward(context: ModeContext, match) -> ModeResult:
    del match
    return _move(context, scanning.word_backward)


def word_end(context: ModeContext, match) -> ModeResult:
    del match
    return _move(context, scanning.word_end)


__all__ = [
    "move_left",
    "move_right",
    "move_down",
    "move_up",
    "word_forward",
    "word_backward",
    "word_end",
]
