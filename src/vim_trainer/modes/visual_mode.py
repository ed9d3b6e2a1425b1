"""Character-wise and line-wise visual modes."""

from __future__ import annotations

from vim_trainer.runtime import telemetry

from .base_mode import VISUAL, VISUAL_LINE, VISUAL_MODES
from .normal_mode import NormalMode


class VisualMode(NormalMode):
    """Normal-mode table plus a selection anchored where the mode was entered.

    Hopping between ``v`` and ``V`` keeps the original anchor.
    """

    name = VISUAL

    def on_enter(self, previous: str | None) -> None:
        del previous
        state = self.context.buffer.state
        if state.anchor is None:
            state.set_anchor(state.cursor)
        telemetry.record_event(
            "visual.enter",
            level="debug",
            data={"mode": self.name, "anchor": state.anchor},
        )
        self.context.bus.emit("visual.selection", state.selection)

    def on_exit(self, next_mode: str | None) -> None:
        super().on_exit(next_mode)
        if next_mode not in VISUAL_MODES:
            self.context.buffer.state.clear_anchor()
            self.context.bus.emit("visual.selection", None)


class VisualLineMode(VisualMode):
    name = VISUAL_LINE


__all__ = ["VisualMode", "VisualLineMode"]
