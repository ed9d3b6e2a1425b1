"""Interactive trainer for modal (Vim-style) editing commands."""

__all__ = [
    "adapters",
    "buffer",
    "actions",
    "modes",
    "keymaps",
    "runtime",
    "trainer",
]

__version__ = "0.1.0"
