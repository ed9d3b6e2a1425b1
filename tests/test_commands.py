from __future__ import annotations

from typing import Iterable

import pytest

from vim_trainer.buffer import Buffer
from vim_trainer.modes import KeyInput, ModeResult
from vim_trainer.modes.mode_manager import ModeManager, create_default_manager

NAMED = {"ESC", "<Esc>", "BACKSPACE", "ENTER", "RETURN"}


def make_manager(text: str, cursor: int = 0) -> ModeManager:
    return create_default_manager(Buffer.from_text(text, cursor=cursor))


def press(manager: ModeManager, keys: Iterable[str]) -> ModeResult:
    result = ModeResult(consumed=False)
    for key in keys:
        if key in NAMED:
            result = manager.handle_key(KeyInput(key=key))
        else:
            result = manager.handle_key(KeyInput(key=key, text=key))
    return result


def state(manager: ModeManager) -> tuple[str, int]:
    buffer = manager.context.buffer
    return buffer.text, buffer.cursor


@pytest.mark.parametrize(
    ("text", "cursor", "keys", "expected_text", "expected_cursor"),
    [
        ("hello world\nx", 0, "jx", "hello world\n", 12),
        ("Heallo World", 2, "x", "Hello World", 2),
        ("Keep this\nDelete this line\nKeep this too", 10, "dd", "Keep this\nKeep this too", 10),
        ("Delete this word and keep rest", 7, "dw", "Delete word and keep rest", 7),
        ('text "delete this" more', 8, 'di"', 'text "" more', 6),
        ("<div>remove content</div>", 7, "dit", "<div></div>", 5),
        ("<div>remove content</div>", 7, "dat", "<div/div>", 4),
    ],
)
def test_end_to_end_scenarios(
    text: str,
    cursor: int,
    keys: str,
    expected_text: str,
    expected_cursor: int,
) -> None:
    manager = make_manager(text, cursor)

    press(manager, keys)

    assert state(manager) == (expected_text, expected_cursor)


@pytest.mark.parametrize(
    ("text", "cursor", "keys", "expected"),
    [
        ("abc", 0, "h", 0),
        ("abc", 3, "l", 3),
        ("abc", 1, "l", 2),
        ("abc\nde", 1, "k", 1),
        ("abc\nde", 5, "j", 5),
        ("abcdef\nxy", 5, "j", 9),
        ("xy\nabcdef", 8, "k", 2),
        ("one two three", 0, "ww", 8),
        ("one two three", 8, "b", 4),
        ("one two three", 0, "e", 2),
        ("", 0, "hljkwbe", 0),
    ],
)
def test_motions_keep_cursor_in_bounds(
    text: str, cursor: int, keys: str, expected: int
) -> None:
    manager = make_manager(text, cursor)

    press(manager, keys)

    buffer = manager.context.buffer
    assert buffer.cursor == expected
    assert 0 <= buffer.cursor <= len(buffer.text)
    assert buffer.text == text


@pytest.mark.parametrize(
    ("text", "cursor", "setup", "keys"),
    [
        ("Heallo World", 2, "", "x"),
        ("a\nb\nc", 2, "", "dd"),
        ("c", 0, "", "dd"),
        ("abc", 1, "", ">>"),
        ("  abc", 3, "", "<<"),
        ("Delete this word", 7, "", "dw"),
        ("Delete this word", 7, "", "de"),
        ("Delete this word", 7, "", "diw"),
        ("f(abc)", 3, "", "di("),
        ("f(abc)", 3, "", "da("),
        ("a[bc]", 3, "", "di["),
        ("a[bc]", 3, "", "da["),
        ("o{bc}", 3, "", "di{"),
        ("o{bc}", 3, "", "da{"),
        ('say "hi" now', 6, "", 'di"'),
        ("<b>bold</b>", 4, "", "dit"),
        ("one\ntwo", 0, "yy", "p"),
        ("one two", 0, "yw", "p"),
        ("one two", 0, "", ["c", "w", "ESC"]),
        ("one two", 1, "", ["c", "i", "w", "ESC"]),
        ('say "hi" now', 6, "", ["c", "i", '"', "ESC"]),
        ("abc", 1, "", ["i", "Z", "ESC"]),
        ("abc", 1, "", ["i", "BACKSPACE", "ESC"]),
        ("abc", 1, "", ["i", "ENTER", "ESC"]),
        ("abcdef", 1, "vll", "d"),
        ("a\nb\nc", 2, "V", "d"),
    ],
)
def test_undo_is_strict_inverse(text: str, cursor: int, setup: str, keys) -> None:
    manager = make_manager(text, cursor)
    press(manager, setup)
    before = state(manager)

    press(manager, keys)
    assert state(manager) != before
    press(manager, "u")

    assert state(manager) == before


def test_undo_beyond_seed_is_noop() -> None:
    manager = make_manager("Heallo World", 2)
    press(manager, "x")

    press(manager, "uuu")

    assert state(manager) == ("Heallo World", 2)
    assert len(manager.context.buffer.undo) == 1


def test_undo_steps_back_one_edit_at_a_time() -> None:
    manager = make_manager("abcd", 0)
    press(manager, "xx")
    assert state(manager) == ("cd", 0)

    press(manager, "u")
    assert state(manager) == ("bcd", 0)
    press(manager, "u")
    assert state(manager) == ("abcd", 0)


def test_failed_lookups_are_noops_without_history() -> None:
    manager = make_manager("no delimiters here", 3)

    for keys in ("di(", "da[", "di{", 'di"', "dit", 'ci"'):
        press(manager, keys)

    assert state(manager) == ("no delimiters here", 3)
    assert manager.mode_name == "normal"
    assert len(manager.context.buffer.undo) == 1


def test_x_at_end_of_buffer_is_noop() -> None:
    manager = make_manager("abc", 3)

    press(manager, "x")

    assert state(manager) == ("abc", 3)
    assert len(manager.context.buffer.undo) == 1


def test_yy_then_p_pastes_line_below() -> None:
    manager = make_manager("first\nsecond", 2)

    yank = press(manager, "yy")
    press(manager, "p")

    assert yank.message == "Yanked 1 line"
    assert state(manager) == ("first\nfirst\nsecond", 6)


def test_yy_then_p_on_last_line() -> None:
    manager = make_manager("first\nlast", 7)

    press(manager, "yyp")

    assert manager.context.buffer.text == "first\nlast\nlast"
    assert manager.context.buffer.cursor == 11


def test_yank_word_then_put_after_cursor() -> None:
    manager = make_manager("one two", 0)

    yank = press(manager, "yw")
    press(manager, "p")

    assert yank.message == "Yanked word"
    assert manager.context.registers.get().text == "one "
    assert state(manager) == ("oone ne two", 0)


def test_yank_text_object_fills_register_without_editing() -> None:
    manager = make_manager("call(arg)", 6)

    result = press(manager, "yi(")

    assert result.message == "Yanked text"
    assert manager.context.registers.get().text == "arg"
    assert state(manager) == ("call(arg)", 6)
    assert len(manager.context.buffer.undo) == 1


def test_deletions_leave_register_untouched() -> None:
    manager = make_manager("one two three", 0)
    press(manager, "yw")

    press(manager, "dw")
    press(manager, "dd")

    assert manager.context.registers.get().text == "one "


def test_put_with_empty_register_is_noop() -> None:
    manager = make_manager("abc", 1)

    press(manager, "p")

    assert state(manager) == ("abc", 1)


def test_indent_and_dedent_two_spaces() -> None:
    manager = make_manager("a\nbc", 3)

    press(manager, ">>")
    assert state(manager) == ("a\n  bc", 5)

    press(manager, "<<")
    assert state(manager) == ("a\nbc", 3)


def test_dedent_requires_two_leading_spaces() -> None:
    manager = make_manager(" abc", 2)

    press(manager, "<<")

    assert state(manager) == (" abc", 2)


@pytest.mark.parametrize(
    ("text", "cursor", "expected"),
    [
        ("one two three", 4, ("one  three", 4)),
        ("ab cd", 1, ("a cd", 1)),
        ("ab  cd", 2, ("ab  cd", 2)),
    ],
)
def test_delete_to_word_end(text: str, cursor: int, expected: tuple[str, int]) -> None:
    manager = make_manager(text, cursor)

    press(manager, "de")

    assert state(manager) == expected


def test_change_word_keeps_trailing_blank_and_enters_insert() -> None:
    manager = make_manager("one two three", 4)

    press(manager, "cw")
    press(manager, "six")

    assert manager.mode_name == "insert"
    assert manager.context.buffer.text == "one six three"


def test_inner_word_on_whitespace_deletes_nothing() -> None:
    manager = make_manager("a  b", 1)

    press(manager, "diw")

    assert state(manager) == ("a  b", 1)


def test_change_inner_word_enters_insert() -> None:
    manager = make_manager("Delete entire word here", 9)

    press(manager, "ciw")
    press(manager, "one")

    assert manager.context.buffer.text == "Delete one word here"
    assert manager.mode_name == "insert"


def test_change_inside_quotes() -> None:
    manager = make_manager('text "delete this" more', 8)

    press(manager, 'ci"')

    assert state(manager) == ('text "" more', 6)
    assert manager.mode_name == "insert"


@pytest.mark.parametrize(
    ("text", "cursor", "keys", "expected"),
    [
        ("function(delete this content)", 12, "di(", "function()"),
        ("function(remove with parens)", 10, "da(", "function"),
        ("array[remove this]", 8, "di[", "array[]"),
        ("array[remove this]", 8, "da[", "array"),
        ("object{clear this}", 9, "di{", "object{}"),
        ("object{clear this}", 9, "da{", "object"),
        ("Delete entire word here", 9, "diw", "Delete  word here"),
        ("f(a(b)c)", 6, "di(", "f(a()"),
    ],
)
def test_delete_text_objects(text: str, cursor: int, keys: str, expected: str) -> None:
    manager = make_manager(text, cursor)

    press(manager, keys)

    assert manager.context.buffer.text == expected


def test_insert_mode_edits_and_exit_message() -> None:
    manager = make_manager("ac", 1)

    enter = press(manager, "i")
    press(manager, ["b", "ENTER", "BACKSPACE", "BACKSPACE"])
    press(manager, "X")
    exit_result = press(manager, ["ESC"])

    assert enter.message == "-- INSERT --"
    assert exit_result.message == "Exited Insert mode"
    assert state(manager) == ("aXc", 2)
    assert manager.mode_name == "normal"


def test_backspace_at_start_is_noop() -> None:
    manager = make_manager("abc", 0)

    press(manager, ["i", "BACKSPACE"])

    assert state(manager) == ("abc", 0)
    assert len(manager.context.buffer.undo) == 1


def test_each_insert_keystroke_is_its_own_undo_step() -> None:
    manager = make_manager("", 0)

    press(manager, ["i", "a", "b", "ESC", "u"])

    assert manager.context.buffer.text == "a"


def test_visual_messages() -> None:
    manager = make_manager("abc", 0)

    assert press(manager, "v").message == "-- VISUAL --"
    assert press(manager, "V").message == "-- VISUAL LINE --"
