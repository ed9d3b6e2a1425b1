"""Operator + text object commands (``diw``, ``ci"``, ``da(``, ``dit``, ...)."""

from __future__ import annotations

from typing import Literal

from vim_trainer.buffer import scanning
from vim_trainer.buffer.scanning import Scope
from vim_trainer.modes.base_mode import INSERT, ModeContext, ModeResult

from .edits import edit_result, yank_text

Operator = Literal["d", "c", "y"]


def apply_text_object(
    context: ModeContext,
    match,
    *,
    operator: Operator,
    scope: Scope,
    kind: str,
) -> ModeResult:
    """Run ``operator`` over the ``scope``/``kind`` object around the cursor.

    An object with no enclosing delimiters leaves everything untouched,
    including the mode: ``ci(`` outside parentheses stays in normal mode.
    """

    del match
    buffer = context.buffer
    span = scanning.text_object_span(buffer.text, buffer.cursor, scope, kind)
    if span is None:
        return ModeResult(consumed=True, status="noop")

    start, end = span
    if operator == "y":
        return yank_text(
            context, buffer.get_text_range(start, end), message="Yanked text"
        )

    delta = buffer.delete_range(
        start, end, label=f"{operator}{scope}{kind}", cursor=start
    )
    if operator == "c":
        return ModeResult(consumed=True, switch_to=INSERT, status="change")
    return edit_result(delta)


__all__ = ["apply_text_object", "Operator"]
