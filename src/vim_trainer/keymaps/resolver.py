"""Trie-based key sequence resolution.

Resolution is exact-match-wins: a sequence that equals a bound sequence runs
immediately even if longer bindings share it as a prefix. A sequence that is
only a prefix is ``pending``; anything else is a ``miss``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Optional, Sequence

from vim_trainer.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(slots=True)
class TrieNode:
    binding_id: Optional[str] = None
    children: Dict[str, "TrieNode"] = field(default_factory=dict)
    # Shortest timeout among the bindings below this node.
    wait_ms: Optional[int] = None


def build_trie(bindings: Sequence[Binding]) -> TrieNode:
    root = TrieNode()
    for binding in bindings:
        timeout = binding.sequence.timeout_ms
        node = root
        for token in binding.sequence.tokens:
            if node.wait_ms is None or timeout < node.wait_ms:
                node.wait_ms = timeout
            node = node.children.setdefault(token, TrieNode())
        node.binding_id = binding.id
    return root


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    status: Literal["match", "pending", "miss"]
    match: Optional[ResolutionMatch] = None
    consumed: int = 0
    next_expected: tuple[str, ...] = ()
    timeout_ms: Optional[int] = None


class KeymapResolver:
    """Resolves typed tokens against one trie per mode, rebuilt on registry changes."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._tries: Dict[str, tuple[int, TrieNode]] = {}

    def resolve(self, mode: str, tokens: Sequence[str]) -> ResolutionResult:
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "sequence": " ".join(tokens)},
        ) as handle:
            result = self._walk(self._trie(mode), tuple(tokens))
            handle.add_metadata("status", result.status)
            return result

    def _walk(self, root: TrieNode, tokens: tuple[str, ...]) -> ResolutionResult:
        node = root
        for consumed, token in enumerate(tokens):
            child = node.children.get(token)
            if child is None:
                return ResolutionResult(status="miss", consumed=consumed)
            node = child

        consumed = len(tokens)
        if node.binding_id is not None:
            binding = self._registry.get_binding(node.binding_id)
            action = self._registry.get_action(binding.action_id)
            return ResolutionResult(
                status="match",
                match=ResolutionMatch(binding=binding, action=action),
                consumed=consumed,
            )
        if consumed and node.children:
            return ResolutionResult(
                status="pending",
                consumed=consumed,
                next_expected=tuple(sorted(node.children)),
                timeout_ms=node.wait_ms,
            )
        return ResolutionResult(status="miss", consumed=consumed)

    def _trie(self, mode: str) -> TrieNode:
        revision = self._registry.revision()
        cached = self._tries.get(mode)
        if cached is None or cached[0] != revision:
            cached = (revision, build_trie(list(self._registry.iter_bindings(mode))))
            self._tries[mode] = cached
        return cached[1]


__all__ = [
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
    "TrieNode",
    "build_trie",
]
