"""Exercise catalog navigation with optional saved progress."""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from vim_trainer.modes import ModeBus
from vim_trainer.modes.mode_manager import DEFAULT_SEQUENCE_TIMEOUT_MS
from vim_trainer.runtime import telemetry

from .exercises import DEFAULT_EXERCISES, Exercise
from .progress import ProgressStore
from .session import ExerciseSession


class Trainer:
    """Walks a fixed list of exercises, one fresh session per visit.

    With both ``store`` and ``user`` set, the saved index is restored on
    start (out-of-range values are ignored) and every move is saved.
    """

    def __init__(
        self,
        exercises: Sequence[Exercise] = DEFAULT_EXERCISES,
        *,
        store: ProgressStore | None = None,
        user: str | None = None,
        sequence_timeout_ms: int = DEFAULT_SEQUENCE_TIMEOUT_MS,
        session_factory: Callable[..., ExerciseSession] = ExerciseSession,
    ) -> None:
        if not exercises:
            raise ValueError("Trainer needs at least one exercise")
        self.exercises = tuple(exercises)
        self.store = store
        self.user = user
        self.bus = ModeBus()
        self._sequence_timeout_ms = sequence_timeout_ms
        self._session_factory = session_factory
        self.index = self._restore_index()
        self.session = self._start_session()

    @property
    def exercise(self) -> Exercise:
        return self.exercises[self.index]

    @property
    def has_next(self) -> bool:
        return self.index < len(self.exercises) - 1

    @property
    def has_previous(self) -> bool:
        return self.index > 0

    def select(self, index: int) -> ExerciseSession:
        if not 0 <= index < len(self.exercises):
            raise IndexError(f"Exercise {index} outside 0..{len(self.exercises) - 1}")
        self.index = index
        self.session = self._start_session()
        self._save()
        return self.session

    def next_exercise(self) -> ExerciseSession:
        if not self.has_next:
            return self.session
        return self.select(self.index + 1)

    def previous_exercise(self) -> ExerciseSession:
        if not self.has_previous:
            return self.session
        return self.select(self.index - 1)

    def reset_exercise(self) -> ExerciseSession:
        self.session = self._start_session()
        return self.session

    def _start_session(self) -> ExerciseSession:
        telemetry.record_event(
            "exercise.start",
            data={"index": self.index, "question": self.exercise.question},
        )
        return self._session_factory(
            self.exercise,
            bus=self.bus,
            sequence_timeout_ms=self._sequence_timeout_ms,
        )

    def _restore_index(self) -> int:
        if self.store is None or self.user is None:
            return 0
        saved = self.store.load_index(self.user)
        if saved is None or not 0 <= saved < len(self.exercises):
            return 0
        return saved

    def _save(self) -> None:
        if self.store is None or self.user is None:
            return
        self.store.save_index(self.user, self.index)


__all__ = ["Trainer"]
