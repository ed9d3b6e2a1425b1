"""Mode switches and undo, shared by every non-insert mode."""

from __future__ import annotations

from vim_trainer.modes.base_mode import (
    INSERT,
    NORMAL,
    VISUAL,
    VISUAL_LINE,
    ModeContext,
    ModeResult,
)
from vim_trainer.runtime import telemetry


def enter_insert_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(
        consumed=True, switch_to=INSERT, status="enter_insert", message="-- INSERT --"
    )


def exit_insert_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(
        consumed=True,
        switch_to=NORMAL,
        status="exit_insert",
        message="Exited Insert mode",
    )


def exit_visual_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to=NORMAL, status="exit_visual")


def enter_visual_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(
        consumed=True, switch_to=VISUAL, status="enter_visual", message="-- VISUAL --"
    )


def enter_visual_line_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(
        consumed=True,
        switch_to=VISUAL_LINE,
        status="enter_visual_line",
        message="-- VISUAL LINE --",
    )


def undo(context: ModeContext, match) -> ModeResult:
    del match
    entry = context.buffer.undo_last()
    if entry is None:
        return ModeResult(consumed=True, status="noop")
    telemetry.record_event(
        "buffer.undo",
        level="debug",
        data={"label": entry.label, "remaining": len(context.buffer.undo)},
    )
    context.bus.emit("buffer.undo", entry)
    return ModeResult(consumed=True, status="undo")


__all__ = [
    "enter_insert_mode",
    "exit_insert_mode",
    "exit_visual_mode",
    "enter_visual_mode",
    "enter_visual_line_mode",
    "undo",
]
