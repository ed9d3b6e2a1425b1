"""Key events, mode results, the shared context and the ``Mode`` base class."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from vim_trainer.buffer import Buffer, Register

NORMAL = "normal"
INSERT = "insert"
VISUAL = "visual"
VISUAL_LINE = "visual_line"
VISUAL_MODES = frozenset({VISUAL, VISUAL_LINE})

Listener = Callable[[object], None]


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes.

    Printable keys carry themselves as ``key`` (``"x"``, ``"V"``, ``"<"``);
    named keys use upper-case names (``"ESC"``, ``"BACKSPACE"``, ``"ENTER"``).
    """

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None


@dataclass(slots=True)
class ModeResult:
    """What a key did.

    ``status`` is a short outcome code (``pending``, ``miss``, ``edit``,
    ``noop``, ``timeout`` and others). ``message`` is feedback for the user.
    A non-zero ``timeout_ms`` asks the manager to arm its timer and
    ``switch_to`` to change mode.
    """

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None
    timeout_ms: Optional[int] = None


class ModeBus:
    """Synchronous publish/subscribe between actions, modes and the host."""

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Listener]] = {}

    def subscribe(self, event: str, callback: Listener) -> None:
        self._listeners.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._listeners.get(event, ())):
            callback(payload)


@dataclass(slots=True)
class ModeContext:
    buffer: Buffer
    registers: Register
    bus: ModeBus
    extras: Dict[str, object] = field(default_factory=dict)


class Mode:
    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    @property
    def pending_sequence(self) -> str:
        return ""

    def on_enter(self, previous: Optional[str]) -> None:
        del previous

    def on_exit(self, next_mode: Optional[str]) -> None:
        del next_mode

    def handle_key(self, key: KeyInput) -> ModeResult:  # pragma: no cover - abstract
        raise NotImplementedError

    def handle_timeout(self) -> ModeResult:
        """Called by the manager when a half-typed sequence runs out of time."""

        return ModeResult(consumed=False, status="timeout")


__all__ = [
    "NORMAL",
    "INSERT",
    "VISUAL",
    "VISUAL_LINE",
    "VISUAL_MODES",
    "KeyInput",
    "ModeResult",
    "ModeBus",
    "ModeContext",
    "Mode",
]
