"""A single exercise attempt: buffer, modes and the completion check."""

from __future__ import annotations

from dataclasses import dataclass
import time
from typing import Callable, Dict, Optional

from vim_trainer.buffer import Buffer
from vim_trainer.buffer.state import Selection
from vim_trainer.modes import KeyInput, ModeBus, ModeResult
from vim_trainer.modes.mode_manager import (
    DEFAULT_SEQUENCE_TIMEOUT_MS,
    ModeManager,
    create_default_manager,
)
from vim_trainer.runtime import telemetry

from .exercises import Exercise

COMPLETED_MESSAGE = "Completed!"


@dataclass(frozen=True, slots=True)
class SessionView:
    """Everything a host needs to draw one frame."""

    buffer: str
    cursor: int
    mode: str
    pending_sequence: str
    is_completed: bool
    feedback: str
    selection: Optional[Selection] = None
    show_hint: bool = False


class ExerciseSession:
    """Runs one exercise from its initial text until the user moves on.

    The text is compared with ``expected_text`` after every change to the
    document. Reaching it marks the session completed, any later divergence
    (for example an edit after completing) revokes it again.
    """

    def __init__(
        self,
        exercise: Exercise,
        *,
        bus: ModeBus | None = None,
        sequence_timeout_ms: int = DEFAULT_SEQUENCE_TIMEOUT_MS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.exercise = exercise
        self.bus = bus or ModeBus()
        self.buffer = Buffer.from_text(
            exercise.initial_text, cursor=exercise.cursor_pos, name="exercise"
        )
        self.manager: ModeManager = create_default_manager(
            self.buffer,
            bus=self.bus,
            sequence_timeout_ms=sequence_timeout_ms,
            clock=clock,
        )
        self.is_completed = False
        self.feedback = ""
        self.show_hint = False
        self._checked_version = -1
        self.recheck()

    @property
    def mode(self) -> str:
        return self.manager.mode_name or "normal"

    @property
    def pending_sequence(self) -> str:
        return self.manager.pending_sequence

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = self.manager.handle_key(key)
        self._absorb(result)
        return result

    def process_timeouts(self) -> Dict[str, ModeResult]:
        results = self.manager.process_timeouts()
        for result in results.values():
            self._absorb(result)
        return results

    def force_timeout(self) -> Dict[str, ModeResult]:
        results = self.manager.force_timeout()
        for result in results.values():
            self._absorb(result)
        return results

    def toggle_hint(self) -> bool:
        self.show_hint = not self.show_hint
        return self.show_hint

    def recheck(self) -> bool:
        """Compare the buffer with the expected text if it changed since last time."""

        version = self.buffer.document.version
        if version == self._checked_version:
            return self.is_completed
        self._checked_version = version

        matches = self.buffer.text == self.exercise.expected_text
        if matches and not self.is_completed:
            self.is_completed = True
            self.feedback = COMPLETED_MESSAGE
            telemetry.record_event(
                "exercise.completed", data={"question": self.exercise.question}
            )
            self.bus.emit("exercise.completed", self.exercise)
        elif not matches and self.is_completed:
            self.is_completed = False
            telemetry.record_event(
                "exercise.revoked", data={"question": self.exercise.question}
            )
            self.bus.emit("exercise.revoked", self.exercise)
        return self.is_completed

    def view(self) -> SessionView:
        return SessionView(
            buffer=self.buffer.text,
            cursor=self.buffer.cursor,
            mode=self.mode,
            pending_sequence=self.pending_sequence,
            is_completed=self.is_completed,
            feedback=self.feedback,
            selection=self.buffer.state.selection,
            show_hint=self.show_hint,
        )

    def _absorb(self, result: ModeResult) -> None:
        if result.message:
            self.feedback = result.message
        self.recheck()


__all__ = ["COMPLETED_MESSAGE", "ExerciseSession", "SessionView"]
