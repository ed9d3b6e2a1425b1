"""Textual host: the UI-agnostic adapter and the ``vim-trainer`` app."""

from .controller import TextualTrainerAdapter, TrainerUIHooks, render_buffer, status_line

__all__ = ["TextualTrainerAdapter", "TrainerUIHooks", "render_buffer", "status_line"]
