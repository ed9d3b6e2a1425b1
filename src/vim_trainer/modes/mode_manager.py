"""Mode manager: active mode, transitions and the pending-sequence timer."""

from __future__ import annotations

from dataclasses import dataclass
import time
from typing import Callable, Dict, Optional, Type

from vim_trainer.buffer import Buffer
from vim_trainer.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from vim_trainer.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .insert_mode import InsertMode
from .normal_mode import NormalMode
from .visual_mode import VisualLineMode, VisualMode

DEFAULT_SEQUENCE_TIMEOUT_MS = 1000


@dataclass(frozen=True, slots=True)
class PendingTimeout:
    mode: str
    deadline: float
    timeout_ms: int


class ModeManager:
    """Routes keys to the active mode and applies the transitions it asks for.

    Only the active mode can hold a half-typed sequence, so a single timer is
    kept. It is re-armed by every ``pending`` result and dropped by any other
    result or by a mode change.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
        sequence_timeout_ms: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.context = context
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self._clock = clock
        self._timer: Optional[PendingTimeout] = None

        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="vim_trainer.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(
                self.keymap_registry, default_sequence_timeout_ms=sequence_timeout_ms
            )
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="vim_trainer.keymaps"
        )
        context.extras.setdefault("keymap_registry", self.keymap_registry)
        context.extras.setdefault("keymap_resolver", self.keymap_resolver)
        context.extras.setdefault("mode_manager", self)

    @property
    def active_mode(self) -> Optional[Mode]:
        return None if self._active is None else self._modes[self._active]

    @property
    def mode_name(self) -> Optional[str]:
        return self._active

    @property
    def pending_sequence(self) -> str:
        mode = self.active_mode
        return mode.pending_sequence if mode else ""

    def register_mode(
        self, mode_cls: Type[Mode], /, *mode_args: object, **mode_kwargs: object
    ) -> Mode:
        """Instantiate and add a mode; the first one registered becomes active."""

        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self._active
        if previous == name:
            return
        self.cancel_timeout()
        if previous is not None:
            self._modes[previous].on_exit(name)
        self._active = name
        self._modes[name].on_enter(previous)
        telemetry.record_event("mode.switch", data={"mode": name, "previous": previous})
        self.context.bus.emit("mode.switch", name)

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            f"mode::{mode.name}",
            component=True,
            metadata={"key": key.key, "mode": mode.name},
        ):
            result = mode.handle_key(key)
        return self._apply(mode, result)

    def has_pending_timeout(self, mode_name: Optional[str] = None) -> bool:
        if self._timer is None:
            return False
        return mode_name is None or self._timer.mode == mode_name

    def arm_timeout(self, mode_name: str, timeout_ms: int) -> None:
        self._timer = PendingTimeout(
            mode=mode_name,
            deadline=self._clock() + timeout_ms / 1000.0,
            timeout_ms=timeout_ms,
        )

    def cancel_timeout(self, mode_name: Optional[str] = None) -> None:
        if self.has_pending_timeout(mode_name):
            self._timer = None

    def process_timeouts(self) -> Dict[str, ModeResult]:
        """Expire the timer if its deadline has passed; meant to be polled."""

        timer = self._timer
        if timer is None or timer.deadline > self._clock():
            return {}
        return self._expire(timer)

    def force_timeout(self, mode_name: Optional[str] = None) -> Dict[str, ModeResult]:
        timer = self._timer
        if timer is None or not self.has_pending_timeout(mode_name):
            return {}
        return self._expire(timer)

    def _expire(self, timer: PendingTimeout) -> Dict[str, ModeResult]:
        mode = self._modes[timer.mode]
        self._timer = None
        with telemetry.span(
            f"mode_timeout::{mode.name}", component=True, metadata={"mode": mode.name}
        ):
            result = mode.handle_timeout()
        return {mode.name: self._apply(mode, result)}

    def _apply(self, mode: Mode, result: ModeResult) -> ModeResult:
        if result.timeout_ms:
            self.arm_timeout(mode.name, result.timeout_ms)
        else:
            self.cancel_timeout(mode.name)
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result


def create_default_manager(
    buffer: Buffer,
    *,
    bus: ModeBus | None = None,
    sequence_timeout_ms: int = DEFAULT_SEQUENCE_TIMEOUT_MS,
    clock: Callable[[], float] = time.monotonic,
) -> ModeManager:
    """Manager over ``buffer`` with normal (active), insert and both visual modes."""

    if sequence_timeout_ms <= 0:
        raise ValueError("sequence_timeout_ms must be positive")
    context = ModeContext(buffer=buffer, registers=buffer.registers, bus=bus or ModeBus())
    manager = ModeManager(context, sequence_timeout_ms=sequence_timeout_ms, clock=clock)
    for mode_cls in (NormalMode, VisualMode, VisualLineMode):
        manager.register_mode(mode_cls, default_pending_timeout_ms=sequence_timeout_ms)
    manager.register_mode(InsertMode)
    return manager


__all__ = [
    "DEFAULT_SEQUENCE_TIMEOUT_MS",
    "ModeManager",
    "PendingTimeout",
    "create_default_manager",
]
