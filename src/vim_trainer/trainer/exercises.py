"""Exercise records and the built-in catalog."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Exercise:
    """One practice task: start from ``initial_text`` and reach ``expected_text``.

    ``shortcut`` is the hint shown on request; it is never enforced, any key
    sequence producing the expected text completes the exercise.
    """

    question: str
    shortcut: str
    initial_text: str
    cursor_pos: int
    expected_text: str

    def __post_init__(self) -> None:
        if not self.question:
            raise ValueError("Exercise question cannot be empty")
        if not 0 <= self.cursor_pos <= len(self.initial_text):
            raise ValueError(
                f"cursor_pos {self.cursor_pos} outside 0..{len(self.initial_text)}"
            )


DEFAULT_EXERCISES: tuple[Exercise, ...] = (
    Exercise(
        question="Move down one line and delete 'x'",
        shortcut="j x",
        initial_text="hello world\nx",
        cursor_pos=0,
        expected_text="hello world\n",
    ),
    Exercise(
        question="Delete character under cursor to fix the word",
        shortcut="x",
        initial_text="Heallo World",
        cursor_pos=2,
        expected_text="Hello World",
    ),
    Exercise(
        question="Delete the middle line",
        shortcut="dd",
        initial_text="Keep this\nDelete this line\nKeep this too",
        cursor_pos=10,
        expected_text="Keep this\nKeep this too",
    ),
    Exercise(
        question="Delete the next word from cursor",
        shortcut="dw",
        initial_text="Delete this word and keep rest",
        cursor_pos=7,
        expected_text="Delete word and keep rest",
    ),
    Exercise(
        question="Delete the word under cursor (inner word)",
        shortcut="diw",
        initial_text="Delete entire word here",
        cursor_pos=9,
        expected_text="Delete  word here",
    ),
    Exercise(
        question="Delete inside quotes only",
        shortcut='di"',
        initial_text='text "delete this" more',
        cursor_pos=8,
        expected_text='text "" more',
    ),
    Exercise(
        question="Delete inside parentheses only",
        shortcut="di(",
        initial_text="function(delete this content)",
        cursor_pos=12,
        expected_text="function()",
    ),
    Exercise(
        question="Delete inside brackets only",
        shortcut="di[",
        initial_text="array[remove this]",
        cursor_pos=8,
        expected_text="array[]",
    ),
    Exercise(
        question="Delete inside braces only",
        shortcut="di{",
        initial_text="object{clear this}",
        cursor_pos=9,
        expected_text="object{}",
    ),
    Exercise(
        question="Delete the parentheses and contents",
        shortcut="da(",
        initial_text="function(remove with parens)",
        cursor_pos=10,
        expected_text="function",
    ),
    Exercise(
        question="Delete inside HTML tag only",
        shortcut="dit",
        initial_text="<div>remove content</div>",
        cursor_pos=7,
        expected_text="<div></div>",
    ),
)


__all__ = ["Exercise", "DEFAULT_EXERCISES"]
