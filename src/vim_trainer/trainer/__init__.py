"""Exercises, sessions and progress tracking."""

from .exercises import DEFAULT_EXERCISES, Exercise
from .progress import JsonProgressStore, MemoryProgressStore, ProgressStore
from .session import COMPLETED_MESSAGE, ExerciseSession, SessionView
from .trainer import Trainer

__all__ = [
    "Exercise",
    "DEFAULT_EXERCISES",
    "ProgressStore",
    "MemoryProgressStore",
    "JsonProgressStore",
    "ExerciseSession",
    "SessionView",
    "COMPLETED_MESSAGE",
    "Trainer",
]
