"""Textual-agnostic adapter wiring a Trainer into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from rich.style import Style
from rich.text import Text

from vim_trainer.modes import KeyInput, ModeResult
from vim_trainer.trainer import SessionView, Trainer

DEFAULT_CURSOR_STYLE = "reverse"
DEFAULT_SELECTION_STYLE = "black on yellow"

BUS_EVENTS = (
    "mode.switch",
    "visual.selection",
    "visual.delete",
    "register.yank",
    "buffer.undo",
    "exercise.completed",
    "exercise.revoked",
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def render_buffer(
    view: SessionView,
    *,
    cursor_style: str = DEFAULT_CURSOR_STYLE,
    selection_style: str = DEFAULT_SELECTION_STYLE,
) -> Text:
    """Buffer text with the selection and the block cursor highlighted.

    A cursor sitting on a line break or past the end is drawn as an extra
    blank cell so it stays visible.
    """

    content = view.buffer
    cursor = max(0, min(view.cursor, len(content)))
    padded = cursor >= len(content) or content[cursor] == "\n"
    if padded:
        content = content[:cursor] + " " + content[cursor:]

    def shifted(offset: int) -> int:
        return offset + 1 if padded and offset > cursor else offset

    text = Text(content)
    if view.selection is not None:
        start, end = view.selection
        text.stylize(Style.parse(selection_style), shifted(start), shifted(end) + 1)
    text.stylize(Style.parse(cursor_style), cursor, cursor + 1)
    return text


def status_line(view: SessionView) -> str:
    parts = [f"-- {view.mode.replace('_', ' ').upper()} --"]
    if view.pending_sequence:
        parts.append(view.pending_sequence)
    if view.feedback:
        parts.append(view.feedback)
    return "  ".join(parts)


@dataclass(slots=True)
class TrainerUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[SessionView], None]
    update_exercise: Callable[[Trainer], None] = _noop
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualTrainerAdapter:
    """Bridges Trainer sessions and bus events to a Textual-friendly surface."""

    def __init__(self, trainer: Trainer, hooks: TrainerUIHooks) -> None:
        self.trainer = trainer
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_exercise()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        normalized_modifiers = tuple(str(mod).upper() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized_modifiers)
        result = self.trainer.session.handle_key(
            KeyInput(key=key, text=text, modifiers=normalized_modifiers)
        )
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
            timeout_ms=result.timeout_ms,
        )
        self._refresh_view()
        return result

    def process_timeouts(self) -> Dict[str, ModeResult]:
        """Forward expired timers and surface results to the UI."""

        results = self.trainer.session.process_timeouts()
        for mode_name, outcome in results.items():
            self._log_state("timeout ->", source_mode=mode_name, status=outcome.status)
        if results:
            self._refresh_view()
        return results

    def next_exercise(self) -> None:
        self.trainer.next_exercise()
        self._refresh_exercise()

    def previous_exercise(self) -> None:
        self.trainer.previous_exercise()
        self._refresh_exercise()

    def reset_exercise(self) -> None:
        self.trainer.reset_exercise()
        self._refresh_exercise()

    def toggle_hint(self) -> bool:
        shown = self.trainer.session.toggle_hint()
        self._refresh_view()
        return shown

    def _subscribe_events(self) -> None:
        bus = self.trainer.bus
        for event in BUS_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _refresh_exercise(self) -> None:
        self.hooks.update_exercise(self.trainer)
        self._refresh_view()

    def _refresh_view(self) -> None:
        view = self.trainer.session.view()
        self.hooks.update_view(view)
        self.hooks.update_status(status_line(view))

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        session = self.trainer.session
        return {
            "exercise": self.trainer.index,
            "mode": session.mode,
            "cursor": session.buffer.cursor,
            "selection": session.buffer.state.selection,
            "pending": session.pending_sequence,
            "buffer_version": session.buffer.document.version,
        }


__all__ = [
    "TextualTrainerAdapter",
    "TrainerUIHooks",
    "render_buffer",
    "status_line",
]
