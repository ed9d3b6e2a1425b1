"""Actions and bindings, indexed per mode by their key sequence."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterator, Optional

from vim_trainer.runtime.telemetry import span

from .models import ActionRef, Binding, KeySequence


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """A mode can bind each key sequence at most once."""

    def __init__(self, binding: Binding, existing: Binding) -> None:
        super().__init__(
            f"Binding '{binding.id}' reuses '{binding.key_signature}' "
            f"already bound by '{existing.id}' in mode '{binding.mode}'"
        )
        self.binding = binding
        self.existing = existing


class KeymapRegistry:
    """Holds the command table; ``revision`` changes whenever bindings do.

    Resolvers cache their tries per revision, so any edit here is picked up
    on the next lookup.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._by_mode: Dict[str, Dict[tuple[str, ...], str]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        if action_id not in self._actions:
            raise KeyError(f"Action '{action_id}' is not registered")
        return self._actions[action_id]

    def get_binding(self, binding_id: str) -> Binding:
        if binding_id not in self._bindings:
            raise KeyError(f"Binding '{binding_id}' is not registered")
        return self._bindings[binding_id]

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if action.id in self._actions and not replace:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Bind ``binding.sequence`` in ``binding.mode``.

        With ``replace`` an existing binding of the same id or the same
        sequence is dropped first; without it either clash raises.
        """

        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action "
                    f"'{binding.action_id}'"
                )

            existing = self.binding_for(binding.mode, binding.sequence.tokens)
            if replace:
                if existing is not None:
                    self._drop(existing)
                if binding.id in self._bindings:
                    self._drop(self._bindings[binding.id])
            elif existing is not None and existing.id != binding.id:
                raise KeymapConflictError(binding, existing)
            elif binding.id in self._bindings:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            self._store(binding)
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.get(binding_id)
        if binding is None:
            return None
        self._drop(binding)
        self._revision += 1
        return binding

    def binding_for(self, mode: str, tokens: tuple[str, ...]) -> Optional[Binding]:
        binding_id = self._by_mode.get(mode, {}).get(tokens)
        return None if binding_id is None else self._bindings[binding_id]

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        if mode is None:
            yield from self._bindings.values()
            return
        for binding_id in self._by_mode.get(mode, {}).values():
            yield self._bindings[binding_id]

    def override_sequence_timeouts(
        self, *, timeout_ms: int, mode: Optional[str] = None
    ) -> None:
        """Give every binding (of ``mode``) the same pending-sequence timeout."""

        if timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")
        targets = list(self.iter_bindings(mode))
        if not targets:
            return
        for binding in targets:
            sequence = KeySequence(binding.sequence.strokes, timeout_ms=timeout_ms)
            self._bindings[binding.id] = replace(binding, sequence=sequence)
        self._revision += 1

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            modes=tuple(sorted(self._by_mode)),
        )

    def _store(self, binding: Binding) -> None:
        self._bindings[binding.id] = binding
        self._by_mode.setdefault(binding.mode, {})[binding.sequence.tokens] = binding.id

    def _drop(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        table = self._by_mode.get(binding.mode, {})
        if table.get(binding.sequence.tokens) == binding.id:
            del table[binding.sequence.tokens]
        if not table:
            self._by_mode.pop(binding.mode, None)


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
]
