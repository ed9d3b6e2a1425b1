"""Built-in command table seeding every mode.

Normal, Visual and Visual Line share one table. Visual modes rebind ``d`` to
act on the selection, so shared entries starting with ``d`` are left out
there (exact-match-wins would make them unreachable anyway).
"""

from __future__ import annotations

from dataclasses import replace
from functools import partial
from typing import Iterable, Sequence

from vim_trainer.actions import core as core_actions
from vim_trainer.actions import edits as edit_actions
from vim_trainer.actions import insert as insert_actions
from vim_trainer.actions import motions as motion_actions
from vim_trainer.actions import text_objects as text_object_actions
from vim_trainer.actions import visual as visual_actions

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry

SHARED_MODES: tuple[str, ...] = ("normal", "visual", "visual_line")
VISUAL_OVERRIDE_KEYS = frozenset({"d"})

# (typed keys, action id, description)
COMMAND_TABLE: tuple[tuple[str, str, str], ...] = (
    ("h", "motion.left", "Move left"),
    ("l", "motion.right", "Move right"),
    ("j", "motion.down", "Move to the next line"),
    ("k", "motion.up", "Move to the previous line"),
    ("w", "motion.word_forward", "Move to the next word"),
    ("b", "motion.word_backward", "Move to the previous word"),
    ("e", "motion.word_end", "Move to the end of the word"),
    ("x", "edit.delete_char", "Delete the character under the cursor"),
    ("i", "core.enter_insert", "Enter insert mode"),
    ("dd", "edit.delete_line", "Delete the current line"),
    ("yy", "edit.yank_line", "Yank the current line"),
    ("p", "edit.put", "Paste the register"),
    ("u", "core.undo", "Undo the last change"),
    ("v", "core.enter_visual", "Enter visual mode"),
    ("V", "core.enter_visual_line", "Enter visual line mode"),
    (">>", "edit.indent", "Indent the current line"),
    ("<<", "edit.dedent", "Dedent the current line"),
    ("dw", "edit.delete_word", "Delete to the next word"),
    ("de", "edit.delete_word_end", "Delete to the end of the word"),
    ("cw", "edit.change_word", "Change the rest of the word"),
    ("yw", "edit.yank_word", "Yank to the next word"),
)

TEXT_OBJECT_OPERATORS: tuple[tuple[str, str], ...] = (
    ("d", "Delete"),
    ("c", "Change"),
    ("y", "Yank"),
)

# (scope, object marker, description)
TEXT_OBJECTS: tuple[tuple[str, str, str], ...] = (
    ("i", "w", "inner word"),
    ("i", "(", "inside parentheses"),
    ("a", "(", "around parentheses"),
    ("i", "[", "inside brackets"),
    ("a", "[", "around brackets"),
    ("i", "{", "inside braces"),
    ("a", "{", "around braces"),
    ("i", '"', "inside quotes"),
    ("i", "t", "inside tag"),
    ("a", "t", "around tag"),
)

ESCAPE_KEYS: tuple[str, ...] = ("ESC", "<Esc>")
INSERT_EXIT_KEYS: tuple[str, ...] = ESCAPE_KEYS + ("ctrl+[", "ctrl+c")


def default_actions() -> tuple[ActionRef, ...]:
    actions = [
        ActionRef("core.enter_insert", core_actions.enter_insert_mode, description="Enter insert mode"),
        ActionRef("core.exit_insert", core_actions.exit_insert_mode, description="Leave insert mode"),
        ActionRef("core.exit_visual", core_actions.exit_visual_mode, description="Leave visual mode"),
        ActionRef("core.enter_visual", core_actions.enter_visual_mode, description="Enter visual mode"),
        ActionRef("core.enter_visual_line", core_actions.enter_visual_line_mode, description="Enter visual line mode"),
        ActionRef("core.undo", core_actions.undo, description="Undo the last change"),
        ActionRef("motion.left", motion_actions.move_left, description="Move left"),
        ActionRef("motion.right", motion_actions.move_right, description="Move right"),
        ActionRef("motion.down", motion_actions.move_down, description="Move down"),
        ActionRef("motion.up", motion_actions.move_up, description="Move up"),
        ActionRef("motion.word_forward", motion_actions.word_forward, description="Next word"),
        ActionRef("motion.word_backward", motion_actions.word_backward, description="Previous word"),
        ActionRef("motion.word_end", motion_actions.word_end, description="End of word"),
        ActionRef("edit.delete_char", edit_actions.delete_char, description="Delete character"),
        ActionRef("edit.delete_line", edit_actions.delete_line, description="Delete line"),
        ActionRef("edit.yank_line", edit_actions.yank_line, description="Yank line"),
        ActionRef("edit.put", edit_actions.put, description="Paste register"),
        ActionRef("edit.indent", edit_actions.indent_line, description="Indent line"),
        ActionRef("edit.dedent", edit_actions.dedent_line, description="Dedent line"),
        ActionRef("edit.delete_word", edit_actions.delete_word, description="Delete word"),
        ActionRef("edit.delete_word_end", edit_actions.delete_to_word_end, description="Delete to word end"),
        ActionRef("edit.change_word", edit_actions.change_word, description="Change word"),
        ActionRef("edit.yank_word", edit_actions.yank_word, description="Yank word"),
        ActionRef("visual.delete_selection", visual_actions.delete_selection, description="Delete selection"),
        ActionRef("visual.delete_lines", visual_actions.delete_selected_lines, description="Delete selected lines"),
        ActionRef("insert.backspace", insert_actions.backspace, description="Delete left of the cursor"),
        ActionRef("insert.newline", insert_actions.newline, description="Insert a line break"),
    ]
    for operator, verb in TEXT_OBJECT_OPERATORS:
        for scope, kind, label in TEXT_OBJECTS:
            actions.append(
                ActionRef(
                    id=_text_object_action_id(operator, scope, kind),
                    handler=partial(
                        text_object_actions.apply_text_object,
                        operator=operator,
                        scope=scope,
                        kind=kind,
                    ),
                    description=f"{verb} {label}",
                )
            )
    return tuple(actions)


def default_bindings() -> tuple[Binding, ...]:
    commands = list(COMMAND_TABLE)
    for operator, verb in TEXT_OBJECT_OPERATORS:
        for scope, kind, label in TEXT_OBJECTS:
            commands.append(
                (
                    f"{operator}{scope}{kind}",
                    _text_object_action_id(operator, scope, kind),
                    f"{verb} {label}",
                )
            )

    bindings: list[Binding] = []
    for mode in SHARED_MODES:
        for typed, action_id, description in commands:
            if mode != "normal" and typed[0] in VISUAL_OVERRIDE_KEYS:
                continue
            bindings.append(
                Binding(
                    id=f"{mode}.{typed}",
                    mode=mode,
                    sequence=KeySequence.from_typed(typed),
                    action_id=action_id,
                    description=description,
                )
            )

    for mode, delete_action in (
        ("visual", "visual.delete_selection"),
        ("visual_line", "visual.delete_lines"),
    ):
        bindings.extend(
            _named_key_bindings(mode, ESCAPE_KEYS, "core.exit_visual", "Leave visual mode")
        )
        bindings.append(
            Binding(
                id=f"{mode}.d",
                mode=mode,
                sequence=KeySequence.from_strings("d"),
                action_id=delete_action,
                description="Delete the selection",
            )
        )

    bindings.extend(
        _named_key_bindings("insert", INSERT_EXIT_KEYS, "core.exit_insert", "Leave insert mode")
    )
    bindings.extend(
        _named_key_bindings("insert", ("BACKSPACE",), "insert.backspace", "Delete left")
    )
    bindings.extend(
        _named_key_bindings(
            "insert", ("ENTER", "RETURN"), "insert.newline", "Insert a line break"
        )
    )
    return tuple(bindings)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    default_sequence_timeout_ms: int | None = None,
    include_actions: Sequence[str] | None = None,
    exclude_actions: Sequence[str] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register built-in actions and bindings for every mode."""

    allowed_actions = _build_filters(include_actions, exclude_actions)
    allowed_bindings = _build_filters(include_bindings, exclude_bindings)

    registered: set[str] = set()
    for action in default_actions():
        if not _selected(action.id, allowed_actions):
            continue
        registry.register_action(action, replace=replace)
        registered.add(action.id)

    for binding in default_bindings():
        if binding.action_id not in registered:
            continue
        if not _selected(binding.id, allowed_bindings):
            continue
        registry.register_binding(
            _binding_with_timeout(binding, default_sequence_timeout_ms),
            replace=replace,
        )

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)


def _text_object_action_id(operator: str, scope: str, kind: str) -> str:
    return f"textobj.{operator}{scope}{kind}"


def _named_key_bindings(
    mode: str, keys: Iterable[str], action_id: str, description: str
) -> list[Binding]:
    return [
        Binding(
            id=f"{mode}.{key}",
            mode=mode,
            sequence=KeySequence.from_strings(key),
            action_id=action_id,
            description=description,
        )
        for key in keys
    ]


def _binding_with_timeout(binding: Binding, timeout_ms: int | None) -> Binding:
    if timeout_ms is None:
        return binding
    sequence = KeySequence(binding.sequence.strokes, timeout_ms=timeout_ms)
    return replace(binding, sequence=sequence)


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    if item_id in exclude:
        return False
    return True


__all__ = [
    "load_default_keymaps",
    "default_actions",
    "default_bindings",
    "COMMAND_TABLE",
    "TEXT_OBJECTS",
]
