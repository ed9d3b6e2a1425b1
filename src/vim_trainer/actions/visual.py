"""Actions dedicated to Visual and Visual Line selections."""

from __future__ import annotations

from vim_trainer.buffer import scanning
from vim_trainer.modes.base_mode import NORMAL, ModeContext, ModeResult


def delete_selection(context: ModeContext, match) -> ModeResult:
    """Delete ``[min(anchor, cursor), max(anchor, cursor)]`` inclusively."""

    del match
    buffer = context.buffer
    selection = buffer.state.selection
    if selection is None:
        return ModeResult(consumed=True, switch_to=NORMAL, status="no_selection")
    start, end = selection
    delta = buffer.delete_range(start, end + 1, label="visual_delete", cursor=start)
    context.bus.emit("visual.delete", {"range": (start, end), "linewise": False})
    return ModeResult(
        consumed=True,
        switch_to=NORMAL,
        status="visual_delete" if delta.changed else "noop",
    )


def delete_selected_lines(context: ModeContext, match) -> ModeResult:
    """Delete every line the selection touches."""

    del match
    buffer = context.buffer
    selection = buffer.state.selection
    if selection is None:
        return ModeResult(consumed=True, switch_to=NORMAL, status="no_selection")
    start, end = selection
    first = scanning.line_at(buffer.text, start)
    last = scanning.line_at(buffer.text, end)
    updated = scanning.delete_lines(buffer.text, first.index, last.index)
    delta = buffer.replace_text(
        updated, cursor=min(first.start, len(updated)), label="visual_line_delete"
    )
    context.bus.emit(
        "visual.delete", {"range": (first.index, last.index), "linewise": True}
    )
    return ModeResult(
        consumed=True,
        switch_to=NORMAL,
        status="visual_delete" if delta.changed else "noop",
    )


__all__ = ["delete_selection", "delete_selected_lines"]
