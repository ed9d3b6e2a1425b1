"""Insert mode: bound keys run actions, everything printable is typed."""

from __future__ import annotations

from vim_trainer.actions.insert import insert_character
from vim_trainer.keymaps import ResolutionMatch
from vim_trainer.runtime import telemetry

from .base_mode import INSERT, KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import key_to_token, literal_text, require_keymap_resolver


class InsertMode(Mode):
    name = INSERT

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self._resolver = require_keymap_resolver(context)

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = self._resolver.resolve(self.name, (key_to_token(key),))
        if result.status == "match" and result.match:
            return self._execute_match(result.match)

        char = literal_text(key)
        if char is None:
            return ModeResult(consumed=False, status="ignored")
        return insert_character(self.context, char)

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


__all__ = ["InsertMode"]
