from __future__ import annotations

import pytest

from vim_trainer.buffer import scanning


def test_line_at_reports_index_start_and_text() -> None:
    text = "Keep this\nDelete this line\nKeep this too"

    line = scanning.line_at(text, 10)

    assert (line.index, line.start, line.text) == (1, 10, "Delete this line")
    assert line.end == 26


def test_line_at_break_belongs_to_preceding_line() -> None:
    assert scanning.line_at("ab\ncd", 2).index == 0
    assert scanning.line_at("ab\ncd", 3).index == 1
    assert scanning.line_at("ab\n", 3).index == 1


@pytest.mark.parametrize(
    ("text", "cursor", "expected"),
    [
        ("hello world\nx", 0, 12),
        ("abcdef\nxy", 5, 9),
        ("abc\ndef", 5, 5),
        ("", 0, 0),
    ],
)
def test_line_below(text: str, cursor: int, expected: int) -> None:
    assert scanning.line_below(text, cursor) == expected


@pytest.mark.parametrize(
    ("text", "cursor", "expected"),
    [
        ("xy\nabcdef", 8, 2),
        ("abc\ndef", 5, 1),
        ("abc\ndef", 1, 1),
    ],
)
def test_line_above(text: str, cursor: int, expected: int) -> None:
    assert scanning.line_above(text, cursor) == expected


def test_word_forward_skips_run_then_blanks() -> None:
    text = "Delete this word and keep rest"

    assert scanning.word_forward(text, 7) == 12
    assert scanning.word_forward(text, 0) == 7
    assert scanning.word_forward("last", 1) == 4


def test_word_backward_clamps_at_zero() -> None:
    text = "one two  three"

    assert scanning.word_backward(text, 9) == 4
    assert scanning.word_backward(text, 5) == 4
    assert scanning.word_backward(text, 2) == 0
    assert scanning.word_backward(text, 0) == 0


def test_word_end_lands_on_last_character() -> None:
    text = "one two three"

    assert scanning.word_end(text, 0) == 2
    assert scanning.word_end(text, 2) == 6
    assert scanning.word_end("a", 0) == 0


def test_inner_word_and_whitespace() -> None:
    text = "Delete entire word here"

    assert scanning.inner_word(text, 9) == (7, 13)
    assert scanning.inner_word(text, 6) == (6, 6)


def test_enclosure_uses_first_opener_before_and_closer_after() -> None:
    text = "f(a(b)c)"

    # Non-nesting: from inside the inner pair the outer closer is never seen.
    assert scanning.enclosure(text, 4, "(", ")") == (3, 5)
    assert scanning.enclosure(text, 6, "(", ")") == (3, 7)


def test_enclosure_missing_boundary_is_none() -> None:
    assert scanning.enclosure("no parens here", 3, "(", ")") is None
    assert scanning.enclosure(")(", 0, "(", ")") is None


def test_quote_enclosure_prefers_quote_before_cursor() -> None:
    text = 'text "delete this" more'

    assert scanning.quote_enclosure(text, 8) == (5, 17)
    assert scanning.quote_enclosure(text, 17) == (5, 17)
    assert scanning.quote_enclosure(text, 5) is None
    assert scanning.quote_enclosure("no quotes", 2) is None


def test_tag_enclosure_between_angle_brackets() -> None:
    assert scanning.tag_enclosure("<div>remove content</div>", 7) == (4, 19)


@pytest.mark.parametrize(
    ("text", "cursor", "scope", "kind", "expected"),
    [
        ("function(delete this content)", 12, "i", "(", (9, 28)),
        ("function(remove with parens)", 10, "a", "(", (8, 28)),
        ("array[remove this]", 8, "i", "[", (6, 17)),
        ("object{clear this}", 9, "i", "{", (7, 17)),
        ('text "delete this" more', 8, "i", '"', (6, 17)),
        ("<div>remove content</div>", 7, "i", "t", (5, 19)),
        ("<div>remove content</div>", 7, "a", "t", (4, 20)),
        ("Delete entire word here", 9, "i", "w", (7, 13)),
    ],
)
def test_text_object_span(
    text: str, cursor: int, scope: str, kind: str, expected: tuple[int, int]
) -> None:
    assert scanning.text_object_span(text, cursor, scope, kind) == expected


def test_text_object_span_unknown_kind() -> None:
    with pytest.raises(ValueError):
        scanning.text_object_span("abc", 0, "i", "z")


def test_mutation_helpers_return_new_values() -> None:
    text = "abcdef"

    assert scanning.delete_range(text, 4, 1) == ("aef", 1)
    assert scanning.delete_range(text, 5, 99) == ("abcde", 5)
    assert scanning.insert_at(text, 3, "XY") == ("abcXYdef", 5)
    assert scanning.delete_lines("a\nb\nc", 1, 1) == "a\nc"
    assert scanning.delete_lines("a\nb\nc", 0, 2) == ""
    assert text == "abcdef"


def test_clamp_cursor() -> None:
    assert scanning.clamp_cursor("abc", -1) == 0
    assert scanning.clamp_cursor("abc", 7) == 3
