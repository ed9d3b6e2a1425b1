"""Pure text scans used by every motion, operator and text object.

All helpers work on a flat ``text`` string and a character offset; none of
them hold state or mutate anything. Lookups that cannot find a boundary
return ``None`` so callers can turn them into no-ops.

Bracket, quote and tag lookups deliberately take the first opener before the
cursor and the first closer after it. They do not balance nested pairs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Tuple

Span = Tuple[int, int]
Scope = Literal["i", "a"]

LINE_BREAK = "\n"

BRACKET_PAIRS = {"(": ")", "[": "]", "{": "}"}
QUOTE = '"'
TAG_MARKER = "t"
WORD_MARKER = "w"


@dataclass(frozen=True, slots=True)
class LineInfo:
    """Line containing an offset."""

    index: int
    start: int
    text: str

    @property
    def end(self) -> int:
        return self.start + len(self.text)


def clamp_cursor(text: str, cursor: int) -> int:
    return max(0, min(cursor, len(text)))


def split_lines(text: str) -> list[str]:
    return text.split(LINE_BREAK)


def line_at(text: str, offset: int) -> LineInfo:
    """Return the line holding ``offset``.

    An offset that sits on a line break belongs to the line the break ends.
    """

    lines = split_lines(text)
    start = 0
    for index, line in enumerate(lines):
        if start + len(line) >= offset:
            return LineInfo(index=index, start=start, text=line)
        start += len(line) + 1
    last = len(lines) - 1
    return LineInfo(index=last, start=start - len(lines[last]) - 1, text=lines[last])


def line_below(text: str, cursor: int) -> int:
    lines = split_lines(text)
    current = line_at(text, cursor)
    if current.index >= len(lines) - 1:
        return cursor
    column = cursor - current.start
    next_start = current.end + 1
    return next_start + min(column, len(lines[current.index + 1]))


def line_above(text: str, cursor: int) -> int:
    lines = split_lines(text)
    current = line_at(text, cursor)
    if current.index == 0:
        return cursor
    column = cursor - current.start
    previous = lines[current.index - 1]
    previous_start = current.start - len(previous) - 1
    return previous_start + min(column, len(previous))


def word_forward(text: str, cursor: int) -> int:
    pos = cursor
    while pos < len(text) and not text[pos].isspace():
        pos += 1
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def word_backward(text: str, cursor: int) -> int:
    pos = cursor - 1
    while pos > 0 and text[pos].isspace():
        pos -= 1
    while pos > 0 and not text[pos - 1].isspace():
        pos -= 1
    return max(0, pos)


def word_end(text: str, cursor: int) -> int:
    pos = cursor + 1
    while pos < len(text) and text[pos].isspace():
        pos += 1
    while pos < len(text) and not text[pos].isspace():
        pos += 1
    return max(cursor, pos - 1)


def word_run_end(text: str, cursor: int) -> int:
    """Offset just past the non-whitespace run starting at ``cursor``."""

    pos = cursor
    while pos < len(text) and not text[pos].isspace():
        pos += 1
    return pos


def inner_word(text: str, cursor: int) -> Span:
    if cursor < len(text) and text[cursor].isspace():
        return (cursor, cursor)
    start = cursor
    while start > 0 and not text[start - 1].isspace():
        start -= 1
    return (start, word_run_end(text, cursor))


def enclosure(text: str, cursor: int, opener: str, closer: str) -> Optional[Span]:
    """Offsets of the opener at/before and the closer at/after ``cursor``."""

    start = text.rfind(opener, 0, cursor + 1)
    end = text.find(closer, cursor)
    if start == -1 or end == -1 or start >= end:
        return None
    return (start, end)


def quote_enclosure(text: str, cursor: int, quote: str = QUOTE) -> Optional[Span]:
    start = text.rfind(quote, 0, cursor)
    if start == -1:
        start = text.rfind(quote, 0, cursor + 1)
    end = text.find(quote, cursor)
    if start == -1 or end == -1 or start >= end:
        return None
    return (start, end)


def tag_enclosure(text: str, cursor: int) -> Optional[Span]:
    return enclosure(text, cursor, ">", "<")


def text_object_span(
    text: str, cursor: int, scope: Scope, kind: str
) -> Optional[Span]:
    """Resolve ``i``/``a`` + object marker to a deletable ``[start, end)`` span."""

    if kind == WORD_MARKER:
        return inner_word(text, cursor)
    if kind in BRACKET_PAIRS:
        bounds = enclosure(text, cursor, kind, BRACKET_PAIRS[kind])
    elif kind == QUOTE:
        bounds = quote_enclosure(text, cursor)
    elif kind == TAG_MARKER:
        bounds = tag_enclosure(text, cursor)
    else:
        raise ValueError(f"Unknown text object '{kind}'")
    if bounds is None:
        return None
    start, end = bounds
    if scope == "a":
        return (start, end + 1)
    return (start + 1, end)


def delete_range(text: str, start: int, end: int) -> Tuple[str, int]:
    start, end = sorted((clamp_cursor(text, start), clamp_cursor(text, end)))
    return text[:start] + text[end:], start


def insert_at(text: str, offset: int, fragment: str) -> Tuple[str, int]:
    offset = clamp_cursor(text, offset)
    return text[:offset] + fragment + text[offset:], offset + len(fragment)


def delete_lines(text: str, first: int, last: int) -> str:
    lines = split_lines(text)
    del lines[first : last + 1]
    return LINE_BREAK.join(lines)


__all__ = [
    "LineInfo",
    "Span",
    "BRACKET_PAIRS",
    "QUOTE",
    "TAG_MARKER",
    "WORD_MARKER",
    "clamp_cursor",
    "split_lines",
    "line_at",
    "line_below",
    "line_above",
    "word_forward",
    "word_backward",
    "word_end",
    "word_run_end",
    "inner_word",
    "enclosure",
    "quote_enclosure",
    "tag_enclosure",
    "text_object_span",
    "delete_range",
    "insert_at",
    "delete_lines",
]
