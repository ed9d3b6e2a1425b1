"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from vim_trainer.keymaps import KeymapResolver, KeyStroke

from .base_mode import KeyInput, ModeContext


def key_to_token(key: KeyInput) -> str:
    modifiers = key.modifiers
    if len(key.key) == 1:
        # Shifted printable keys already arrive as their shifted character.
        modifiers = tuple(m for m in modifiers if m.lower() != "shift")
    return KeyStroke(key.key, modifiers).token


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


def literal_text(key: KeyInput) -> str | None:
    """Character a key types in insert mode, or ``None`` for non-text keys."""

    if {modifier.lower() for modifier in key.modifiers} - {"shift"}:
        return None
    text = key.text if key.text is not None else key.key
    if len(text) == 1:
        return text
    return None


__all__ = [
    "key_to_token",
    "require_keymap_resolver",
    "literal_text",
]
