"""Editing verbs bound by the default command table."""

from .core import (
    enter_insert_mode,
    enter_visual_line_mode,
    enter_visual_mode,
    exit_insert_mode,
    exit_visual_mode,
    undo,
)
from .edits import (
    change_word,
    dedent_line,
    delete_char,
    delete_line,
    delete_to_word_end,
    delete_word,
    indent_line,
    put,
    yank_line,
    yank_word,
)
from .insert import backspace, insert_character, newline
from .motions import (
    move_down,
    move_left,
    move_right,
    move_up,
    word_backward,
    word_end,
    word_forward,
)
from .text_objects import apply_text_object
from .visual import delete_selected_lines, delete_selection

__all__ = [
    "enter_insert_mode",
    "exit_insert_mode",
    "exit_visual_mode",
    "enter_visual_mode",
    "enter_visual_line_mode",
    "undo",
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "word_forward",
    "word_backward",
    "word_end",
    "delete_char",
    "delete_line",
    "yank_line",
    "put",
    "indent_line",
    "dedent_line",
    "delete_word",
    "delete_to_word_end",
    "change_word",
    "yank_word",
    "apply_text_object",
    "delete_selection",
    "delete_selected_lines",
    "insert_character",
    "backspace",
    "newline",
]
