"""Executable Textual app that hosts the Vim trainer."""

from __future__ import annotations

import argparse
import os
import unicodedata
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header, Static

from vim_trainer.modes.mode_manager import DEFAULT_SEQUENCE_TIMEOUT_MS
from vim_trainer.runtime import telemetry
from vim_trainer.trainer import (
    DEFAULT_EXERCISES,
    JsonProgressStore,
    MemoryProgressStore,
    ProgressStore,
    SessionView,
    Trainer,
)

from .controller import TextualTrainerAdapter, TrainerUIHooks, render_buffer

# Handled by BINDINGS, never forwarded to the trainer.
APP_KEYS = frozenset({"ctrl+n", "ctrl+p", "ctrl+r", "ctrl+q", "f1"})
NAMED_KEYS = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "RETURN",
    "backspace": "BACKSPACE",
    "ctrl+h": "BACKSPACE",
    "tab": "TAB",
}
TIMEOUT_POLL_SECONDS = 0.1

NormalizedKey = Tuple[str, Optional[str], Tuple[str, ...]]


@dataclass
class HeaderText:
    hint: str = ""
    progress: str = ""


class VimTrainerApp(App[None]):
    """Textual UI running the exercise catalog."""

    TITLE = "Vim Trainer"

    CSS = """
	Screen {
		layout: vertical;
	}

	#question {
		height: auto;
		padding: 0 1;
		text-style: bold;
	}

	#hint {
		height: auto;
		padding: 0 1;
		color: $text-muted;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+n", "next_exercise", "Next"),
        ("ctrl+p", "previous_exercise", "Previous"),
        ("ctrl+r", "reset_exercise", "Reset"),
        ("f1", "toggle_hint", "Hint"),
        ("ctrl+q", "quit", "Quit"),
        Binding("ctrl+c", "forward_ctrl_c", "Leave insert", show=False),
    ]

    def __init__(self, trainer: Trainer) -> None:
        super().__init__()
        self.trainer = trainer
        self.adapter: TextualTrainerAdapter | None = None
        self._header = HeaderText()
        self._log = telemetry.get_logger("vim_trainer.app")

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="exercise-area"):
            yield Static("", id="question")
            yield Static("", id="hint")
            yield Static("", id="buffer-view")
        yield Static("", id="status-line")
        yield Footer()

    def on_mount(self) -> None:
        hooks = TrainerUIHooks(
            update_view=self._update_view,
            update_exercise=self._update_exercise,
            update_status=self._update_status,
            log=self._log.debug,
        )
        self.adapter = TextualTrainerAdapter(self.trainer, hooks)
        self.set_interval(TIMEOUT_POLL_SECONDS, self._poll_timeouts)

    def _poll_timeouts(self) -> None:
        if self.adapter is not None:
            self.adapter.process_timeouts()

    def on_key(self, event: events.Key) -> None:
        normalized = translate_key(event)
        if self.adapter is None or normalized is None:
            return
        key, text, modifiers = normalized
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()

    def action_next_exercise(self) -> None:
        self._forward("next_exercise")

    def action_previous_exercise(self) -> None:
        self._forward("previous_exercise")

    def action_reset_exercise(self) -> None:
        self._forward("reset_exercise")

    def action_toggle_hint(self) -> None:
        self._forward("toggle_hint")

    def action_forward_ctrl_c(self) -> None:
        # Ctrl+C leaves insert mode instead of quitting.
        if self.adapter is not None:
            self.adapter.handle_textual_key("c", modifiers=("CTRL",))

    def _forward(self, command: str) -> None:
        if self.adapter is not None:
            getattr(self.adapter, command)()

    def _update_exercise(self, trainer: Trainer) -> None:
        exercise = trainer.exercise
        self._header.hint = f"Hint: {exercise.shortcut}"
        self._header.progress = f"Exercise {trainer.index + 1}/{len(trainer.exercises)}"
        self.sub_title = self._header.progress
        self.query_one("#question", Static).update(exercise.question)

    def _update_view(self, view: SessionView) -> None:
        self.query_one("#buffer-view", Static).update(render_buffer(view))
        self.query_one("#hint", Static).update(self._header.hint if view.show_hint else "")
        suffix = " - completed" if view.is_completed else ""
        self.sub_title = f"{self._header.progress}{suffix}"

    def _update_status(self, status: str) -> None:
        self.query_one("#status-line", Static).update(Text(status))


def key_character(name: str) -> str:
    """Character behind a Textual key name (``left_square_bracket`` is ``[``).

    Textual names punctuation after its Unicode name; names that are not one
    (``home``, ``f5``) and control characters are returned unchanged.
    """

    if len(name) == 1:
        return name
    try:
        character = unicodedata.lookup(name.replace("_", " "))
    except KeyError:
        return name
    return character if character.isprintable() else name


def translate_key(event: events.Key) -> Optional[NormalizedKey]:
    """Map a Textual key event to ``(key, text, modifiers)`` for the trainer."""

    key = event.key
    if key in APP_KEYS:
        return None
    if key in NAMED_KEYS:
        return (NAMED_KEYS[key], None, ())
    if key.startswith("ctrl+"):
        return (key_character(key.split("+", 1)[1]), None, ("CTRL",))
    if event.character and event.is_printable:
        return (event.character, event.character, ())
    return (key.upper(), None, ())


def _positive_int(raw: str) -> int:
    value = int(raw)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {raw!r}")
    return value


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="vim-trainer", description="Practice Vim commands in the terminal."
    )
    parser.add_argument(
        "--exercise",
        type=_positive_int,
        default=None,
        help="1-based exercise number to start from (overrides saved progress)",
    )
    parser.add_argument(
        "--user",
        default=os.environ.get("VIM_TRAINER_USER"),
        help="Name under which progress is saved",
    )
    parser.add_argument(
        "--progress-file",
        default=os.environ.get("VIM_TRAINER_PROGRESS_FILE"),
        help="JSON file for saved progress (default: in-memory only)",
    )
    # String defaults go through ``type`` too, so a bad env value is reported.
    parser.add_argument(
        "--sequence-timeout-ms",
        type=_positive_int,
        default=os.environ.get(
            "VIM_TRAINER_SEQUENCE_TIMEOUT_MS", str(DEFAULT_SEQUENCE_TIMEOUT_MS)
        ),
        help="Milliseconds a partial command waits for its next key (default: 1000)",
    )
    args = parser.parse_args(argv)
    if args.exercise is not None and args.exercise > len(DEFAULT_EXERCISES):
        parser.error(f"--exercise must be at most {len(DEFAULT_EXERCISES)}")
    return args


def build_trainer(args: argparse.Namespace) -> Trainer:
    store: ProgressStore = (
        JsonProgressStore(args.progress_file)
        if args.progress_file
        else MemoryProgressStore()
    )
    trainer = Trainer(
        store=store,
        user=args.user,
        sequence_timeout_ms=args.sequence_timeout_ms,
    )
    if args.exercise is not None:
        trainer.select(args.exercise - 1)
    return trainer


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset="tui")
    VimTrainerApp(build_trainer(args)).run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
