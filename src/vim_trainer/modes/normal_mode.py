"""Normal mode driven entirely by the keymap resolver."""

from __future__ import annotations

from typing import List

from vim_trainer.keymaps import ResolutionMatch
from vim_trainer.runtime import telemetry

from .base_mode import NORMAL, KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import key_to_token, require_keymap_resolver


class NormalMode(Mode):
    """Accumulates keys until they match, stay a prefix, or miss.

    A match runs immediately, a prefix keeps waiting (the manager arms the
    timeout), and a miss throws away the whole sequence.
    """

    name = NORMAL

    def __init__(
        self,
        context: ModeContext,
        *,
        default_pending_timeout_ms: int = 1000,
    ) -> None:
        super().__init__(context)
        self._resolver = require_keymap_resolver(context)
        self._pending: List[str] = []
        self._default_timeout_ms = default_pending_timeout_ms

    @property
    def pending_sequence(self) -> str:
        return "".join(self._pending)

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self._pending.clear()

    def handle_key(self, key: KeyInput) -> ModeResult:
        self._pending.append(key_to_token(key))
        result = self._resolver.resolve(self.name, tuple(self._pending))

        if result.status == "match" and result.match:
            self._pending.clear()
            return self._execute_match(result.match)

        if result.status == "pending":
            return ModeResult(
                consumed=True,
                status="pending",
                timeout_ms=result.timeout_ms or self._default_timeout_ms,
            )

        telemetry.record_event(
            "keymaps.miss",
            level="debug",
            data={"mode": self.name, "sequence": self.pending_sequence},
        )
        self._pending.clear()
        return ModeResult(consumed=False, status="miss")

    def handle_timeout(self) -> ModeResult:
        if not self._pending:
            return ModeResult(consumed=False, status="timeout")
        telemetry.record_event(
            "keymaps.pending_timeout",
            level="debug",
            data={"mode": self.name, "sequence": self.pending_sequence},
        )
        self._pending.clear()
        return ModeResult(consumed=False, status="timeout")

    def _execute_match(self, match: ResolutionMatch) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)


__all__ = ["NormalMode"]
