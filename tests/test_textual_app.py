import pytest
from textual import events

from vim_trainer.adapters.textual import TextualTrainerAdapter, TrainerUIHooks
from vim_trainer.adapters.textual.app import (
    _parse_args,
    build_trainer,
    key_character,
    translate_key,
)
from vim_trainer.trainer import (
    DEFAULT_EXERCISES,
    JsonProgressStore,
    MemoryProgressStore,
    SessionView,
    Trainer,
)


def test_parse_args_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("USER", "PROGRESS_FILE", "SEQUENCE_TIMEOUT_MS"):
        monkeypatch.delenv(f"VIM_TRAINER_{name}", raising=False)

    args = _parse_args([])

    assert args.exercise is None
    assert args.user is None
    assert args.progress_file is None
    assert args.sequence_timeout_ms == 1000


def test_parse_args_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VIM_TRAINER_USER", "alice")
    monkeypatch.setenv("VIM_TRAINER_SEQUENCE_TIMEOUT_MS", "750")

    args = _parse_args([])

    assert args.user == "alice"
    assert args.sequence_timeout_ms == 750


@pytest.mark.parametrize(
    "argv",
    [
        ["--sequence-timeout-ms", "0"],
        ["--sequence-timeout-ms", "soon"],
        ["--exercise", "0"],
        ["--exercise", str(len(DEFAULT_EXERCISES) + 1)],
    ],
)
def test_parse_args_rejects_bad_values(argv: list[str]) -> None:
    with pytest.raises(SystemExit):
        _parse_args(argv)


def test_bad_timeout_from_environment_is_reported(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VIM_TRAINER_SEQUENCE_TIMEOUT_MS", "-5")

    with pytest.raises(SystemExit):
        _parse_args([])


def test_build_trainer_selects_exercise_and_store(tmp_path) -> None:
    args = _parse_args(["--exercise", "3", "--user", "bob"])
    trainer = build_trainer(args)

    assert trainer.index == 2
    assert isinstance(trainer.store, MemoryProgressStore)

    path = tmp_path / "progress.json"
    args = _parse_args(["--progress-file", str(path), "--user", "bob"])
    assert isinstance(build_trainer(args).store, JsonProgressStore)


@pytest.mark.parametrize(
    ("key", "character", "expected"),
    [
        ("a", "a", ("a", "a", ())),
        ("V", "V", ("V", "V", ())),
        ("escape", None, ("ESC", None, ())),
        ("backspace", None, ("BACKSPACE", None, ())),
        ("ctrl+left_square_bracket", None, ("[", None, ("CTRL",))),
        ("ctrl+c", None, ("c", None, ("CTRL",))),
        ("ctrl+n", None, None),
        ("f1", None, None),
    ],
)
def test_translate_key(key: str, character: str | None, expected) -> None:
    assert translate_key(events.Key(key, character)) == expected


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("left_square_bracket", "["),
        ("right_square_bracket", "]"),
        ("c", "c"),
        ("home", "home"),
        ("delete", "delete"),
    ],
)
def test_key_character(name: str, expected: str) -> None:
    assert key_character(name) == expected


@pytest.mark.parametrize("key", ["ctrl+left_square_bracket", "ctrl+c", "escape"])
def test_translated_exit_keys_leave_insert_mode(key: str) -> None:
    views: list[SessionView] = []
    adapter = TextualTrainerAdapter(Trainer(), TrainerUIHooks(update_view=views.append))
    adapter.handle_textual_key("i", text="i")
    assert views[-1].mode == "insert"

    translated = translate_key(events.Key(key, None))
    assert translated is not None
    name, text, modifiers = translated
    adapter.handle_textual_key(name, text=text, modifiers=modifiers)

    assert views[-1].mode == "normal"
    assert views[-1].buffer == Trainer().exercise.initial_text
