from __future__ import annotations

import pytest

from vim_trainer.buffer import Buffer, BufferValidationError, Register


def test_from_text_seeds_history_with_initial_state() -> None:
    buffer = Buffer.from_text("Heallo World", cursor=2)

    assert len(buffer.undo) == 1
    assert buffer.undo.seed.text == "Heallo World"
    assert buffer.undo.seed.cursor == 2
    assert buffer.undo.can_undo() is False


def test_initial_cursor_out_of_range_is_rejected() -> None:
    with pytest.raises(BufferValidationError):
        Buffer.from_text("abc", cursor=4)


def test_edit_pushes_pre_edit_snapshot_and_bumps_version() -> None:
    buffer = Buffer.from_text("abc", cursor=1)
    version = buffer.document.version

    delta = buffer.delete_range(1, 2, label="delete_char", cursor=1)

    assert delta.changed is True
    assert buffer.text == "ac"
    assert buffer.document.version == version + 1
    assert buffer.undo.entries[-1].text == "abc"
    assert buffer.undo.entries[-1].label == "delete_char"


def test_no_op_edit_records_nothing() -> None:
    buffer = Buffer.from_text("abc", cursor=3)
    version = buffer.document.version

    delta = buffer.delete_range(3, 4, label="delete_char", cursor=3)

    assert delta.changed is False
    assert buffer.document.version == version
    assert len(buffer.undo) == 1


def test_undo_restores_text_and_cursor() -> None:
    buffer = Buffer.from_text("abc", cursor=1)
    buffer.insert_text("XY", offset=1, label="insert_text")
    assert buffer.text == "aXYbc"
    assert buffer.cursor == 3

    entry = buffer.undo_last()

    assert entry is not None
    assert buffer.text == "abc"
    assert buffer.cursor == 1


def test_undo_at_seed_is_noop() -> None:
    buffer = Buffer.from_text("abc", cursor=1)

    assert buffer.undo_last() is None
    assert buffer.undo_last() is None
    assert buffer.text == "abc"
    assert buffer.cursor == 1


def test_move_cursor_clamps() -> None:
    buffer = Buffer.from_text("abc")

    assert buffer.move_cursor(-5) == 0
    assert buffer.move_cursor(99) == 3
    assert buffer.cursor == 3


def test_get_text_range_normalizes_bounds() -> None:
    buffer = Buffer.from_text("abcdef")

    assert buffer.get_text_range(4, 1) == "bcd"
    assert buffer.get_text_range(4, 99) == "ef"


def test_selection_tracks_anchor_and_cursor() -> None:
    buffer = Buffer.from_text("abcdef", cursor=4)
    assert buffer.state.selection is None

    buffer.state.set_anchor(4)
    buffer.move_cursor(1)

    assert buffer.state.selection == (1, 4)
    assert buffer.snapshot().selection == (1, 4)


def test_register_is_single_slot_and_read_is_not_destructive() -> None:
    register = Register()
    assert register.is_empty

    register.yank("first", register_type="character")
    register.yank("line\n", register_type="line")

    assert register.get().text == "line\n"
    assert register.get().type == "line"
    assert register.get().text == "line\n"
