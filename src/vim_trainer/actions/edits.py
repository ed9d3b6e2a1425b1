"""Normal-mode operators: ``x dd yy p >> << dw de cw yw``."""

from __future__ import annotations

from vim_trainer.buffer import BufferDelta, scanning
from vim_trainer.buffer.registers import RegisterType
from vim_trainer.modes.base_mode import INSERT, ModeContext, ModeResult
from vim_trainer.runtime import telemetry

INDENT = "  "


def edit_result(delta: BufferDelta) -> ModeResult:
    return ModeResult(consumed=True, status="edit" if delta.changed else "noop")


def yank_text(
    context: ModeContext,
    text: str,
    *,
    register_type: RegisterType = "character",
    message: str,
) -> ModeResult:
    if not text:
        return ModeResult(consumed=True, status="noop")
    context.registers.yank(text, register_type=register_type)
    telemetry.record_event(
        "register.yank",
        level="debug",
        data={"type": register_type, "length": len(text)},
    )
    context.bus.emit("register.yank", {"text": text, "type": register_type})
    return ModeResult(consumed=True, status="yank", message=message)


def delete_char(context: ModeContext, match) -> ModeResult:
    del match
    buffer = context.buffer
    cursor = buffer.cursor
    return edit_result(
        buffer.delete_range(cursor, cursor + 1, label="delete_char", cursor=cursor)
    )


def delete_line(context: ModeContext, match) -> ModeResult:
    del match
    buffer = context.buffer
    line = scanning.line_at(buffer.text, buffer.cursor)
    updated = scanning.delete_lines(buffer.text, line.index, line.index)
    return edit_result(
        buffer.replace_text(
            updated, cursor=min(buffer.cursor, len(updated)), label="delete_line"
        )
    )


def yank_line(context: ModeContext, match) -> ModeResult:
    del match
    line = scanning.line_at(context.buffer.text, context.buffer.cursor)
    return yank_text(
        context,
        line.text + scanning.LINE_BREAK,
        register_type="line",
        message="Yanked 1 line",
    )


def put(context: ModeContext, match) -> ModeResult:
    """Paste the register: lines go below the cursor line, text after the cursor."""

    del match
    buffer = context.buffer
    value = context.registers.get()
    if not value.text:
        return ModeResult(consumed=True, status="noop")

    if value.type == "line":
        line = scanning.line_at(buffer.text, buffer.cursor)
        if line.end < len(buffer.text):
            offset = line.end + 1
            fragment = value.text
        else:
            offset = line.end
            fragment = scanning.LINE_BREAK + value.text.removesuffix(
                scanning.LINE_BREAK
            )
        target = line.end + 1
        delta = buffer.insert_text(fragment, offset=offset, label="put", cursor=target)
    else:
        offset = min(buffer.cursor + 1, len(buffer.text))
        delta = buffer.insert_text(
            value.text, offset=offset, label="put", cursor=buffer.cursor
        )
    return edit_result(delta)


def indent_line(context: ModeContext, match) -> ModeResult:
    del match
    buffer = context.buffer
    line = scanning.line_at(buffer.text, buffer.cursor)
    return edit_result(
        buffer.insert_text(
            INDENT,
            offset=line.start,
            label="indent",
            cursor=buffer.cursor + len(INDENT),
        )
    )


def dedent_line(context: ModeContext, match) -> ModeResult:
    del match
    buffer = context.buffer
    line = scanning.line_at(buffer.text, buffer.cursor)
    if not line.text.startswith(INDENT):
        return ModeResult(consumed=True, status="noop")
    return edit_result(
        buffer.delete_range(
            line.start,
            line.start + len(INDENT),
            label="dedent",
            cursor=max(line.start, buffer.cursor - len(INDENT)),
        )
    )


def delete_word(context: ModeContext, match) -> ModeResult:
    del match
    buffer = context.buffer
    cursor = buffer.cursor
    end = scanning.word_forward(buffer.text, cursor)
    return edit_result(
        buffer.delete_range(cursor, end, label="delete_word", cursor=cursor)
    )


def delete_to_word_end(context: ModeContext, match) -> ModeResult:
    del match
    buffer = context.buffer
    cursor = buffer.cursor
    end = scanning.word_run_end(buffer.text, cursor)
    return edit_result(
        buffer.delete_range(cursor, end, label="delete_word_end", cursor=cursor)
    )


def change_word(context: ModeContext, match) -> ModeResult:
    """Delete the rest of the word under the cursor and start inserting.

    Only the non-whitespace run is removed, the trailing blanks stay.
    """

    del match
    buffer = context.buffer
    cursor = buffer.cursor
    end = scanning.word_run_end(buffer.text, cursor)
    buffer.delete_range(cursor, end, label="change_word", cursor=cursor)
    return ModeResult(consumed=True, switch_to=INSERT, status="change")


def yank_word(context: ModeContext, match) -> ModeResult:
    del match
    buffer = context.buffer
    end = scanning.word_forward(buffer.text, buffer.cursor)
    return yank_text(
        context, buffer.get_text_range(buffer.cursor, end), message="Yanked word"
    )


__all__ = [
    "edit_result",
    "yank_text",
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
]
