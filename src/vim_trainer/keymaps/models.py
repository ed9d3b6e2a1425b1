"""Key strokes, typed sequences, actions and the bindings that join them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

DEFAULT_TIMEOUT_MS = 1000


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """One key press. ``V`` and ``v`` differ; modifiers are lower-case and sorted.

    The ``token`` form (``"ctrl+["``, ``"d"``, ``"ESC"``) is what modes
    produce from key events and what the resolver's trie is keyed on.
    """

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        cleaned = {m.strip().lower() for m in self.modifiers} - {""}
        object.__setattr__(self, "modifiers", tuple(sorted(cleaned)))

    @property
    def token(self) -> str:
        return "+".join((*self.modifiers, self.key))

    @classmethod
    def parse(cls, token: str) -> "KeyStroke":
        """Inverse of ``token``; a lone ``"+"`` is the plus key."""

        prefix, _, key = token.rpartition("+")
        if prefix and key:
            return cls(key, tuple(prefix.split("+")))
        return cls(token)


@dataclass(frozen=True, slots=True)
class KeySequence:
    """Strokes typed in order, with the time allowed between them."""

    strokes: tuple[KeyStroke, ...]
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    def __post_init__(self) -> None:
        if not self.strokes:
            raise ValueError("KeySequence requires at least one stroke")
        if self.timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(stroke.token for stroke in self.strokes)

    @classmethod
    def from_strings(
        cls, *tokens: str, timeout_ms: int = DEFAULT_TIMEOUT_MS
    ) -> "KeySequence":
        return cls(tuple(KeyStroke.parse(t) for t in tokens if t), timeout_ms)

    @classmethod
    def from_typed(
        cls, typed: str, *, timeout_ms: int = DEFAULT_TIMEOUT_MS
    ) -> "KeySequence":
        """One stroke per character, so ``"di("`` is ``d``, ``i``, ``(``."""

        return cls(tuple(KeyStroke(char) for char in typed), timeout_ms)


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named handler called as ``handler(context, match)``."""

    id: str
    handler: Callable[..., object]
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError(f"handler for '{self.id}' must be callable")

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """``sequence`` typed in ``mode`` runs the action ``action_id``."""

    id: str
    mode: str
    sequence: KeySequence
    action_id: str
    description: str = ""

    def __post_init__(self) -> None:
        for name in ("id", "mode", "action_id"):
            if not getattr(self, name):
                raise ValueError(f"binding {name} cannot be empty")

    @property
    def key_signature(self) -> str:
        return " ".join(self.sequence.tokens)


__all__ = [
    "DEFAULT_TIMEOUT_MS",
    "KeyStroke",
    "KeySequence",
    "ActionRef",
    "Binding",
]
