"""Trainer telemetry on top of telelog.

Callers use three helpers:

``record_event(name, ...)`` -- one structured ``event::<name>`` record
``span(name, ...)`` -- profile a block, optionally tracked as a component
``get_logger(name)`` -- cached telelog logger for ad-hoc lines

``configure(...)`` swaps the active settings. They are read from
``VIM_TRAINER_*`` environment variables unless a preset or explicit settings
are given. The Textual app switches to the ``tui`` preset because console
output would draw over the screen.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "VIM_TRAINER_"
DEFAULT_LOGGER_NAME = "vim_trainer"
TRUTHY = frozenset({"1", "true", "yes", "on"})
DEFAULT_LEVEL = "WARNING"
DEFAULT_BUFFER_SIZE = 2048

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    return default if raw is None else raw.lower() in TRUTHY


@dataclass(frozen=True, slots=True)
class TelemetrySettings:
    level: str = DEFAULT_LEVEL
    console: bool = True
    color: bool = True
    json_format: bool = False
    log_file: str = ""
    buffered: bool = False
    buffer_size: int = DEFAULT_BUFFER_SIZE
    profiling: bool = True

    @classmethod
    def from_env(cls) -> "TelemetrySettings":
        return cls(
            level=(_env("LOG_LEVEL") or DEFAULT_LEVEL).upper(),
            console=not _env_flag("DISABLE_CONSOLE", False),
            color=not _env_flag("NO_COLOR", False),
            json_format=_env_flag("LOG_JSON", False),
            log_file=_env("LOG_FILE") or "",
            buffered=_env_flag("LOG_BUFFERED", False),
            buffer_size=int(_env("LOG_BUFFER_SIZE") or DEFAULT_BUFFER_SIZE),
            profiling=_env_flag("PROFILING", True),
        )


PRESETS: Dict[str, Dict[str, Any]] = {
    "development": {"level": "DEBUG", "console": True, "color": True},
    "tui": {"console": False},
    "quiet": {"level": "ERROR", "console": False, "log_file": ""},
}


def build_config(settings: TelemetrySettings) -> Any:
    config = tl.Config()
    config.with_min_level(settings.level)
    config.with_console_output(settings.console)
    if settings.console:
        config.with_colored_output(settings.color)
    config.with_json_format(settings.json_format)
    if settings.log_file:
        config.with_file_output(settings.log_file)
    if settings.buffered:
        config.with_buffering(True)
        config.with_buffer_size(settings.buffer_size)
    config.with_profiling(settings.profiling)
    return config


def configure(
    settings: Optional[TelemetrySettings] = None,
    *,
    preset: Optional[str] = None,
    config: Optional[Any] = None,
) -> None:
    """Replace the active configuration and drop cached loggers.

    ``preset`` layers one of ``PRESETS`` over the environment settings.
    ``config`` adopts a ready ``telelog.Config`` as-is and excludes the other
    two arguments.
    """

    global _ACTIVE_CONFIG
    if config is not None and (settings is not None or preset is not None):
        raise ValueError("`config` cannot be combined with `settings` or `preset`.")

    if config is None:
        resolved = settings or TelemetrySettings.from_env()
        if preset is not None:
            if preset not in PRESETS:
                raise ValueError(f"Unknown preset '{preset}'.")
            resolved = replace(resolved, **PRESETS[preset])
        config = build_config(resolved)

    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = build_config(TelemetrySettings.from_env())
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
    return _LOGGER_CACHE[logger_name]


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    name = str(level).lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(key), _text(value)) for key, value in payload.items()])
        return
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Yielded by ``span``; metadata added here goes out with a failure record."""

    logger: Any
    name: str
    component: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.name, **self.metadata, "reason": reason}
        if self.component:
            payload["component"] = self.component
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block; ``metadata`` is logger context while it runs.

    ``component=True`` tracks the block under ``name``, a string under that
    string.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None
    handle = SpanHandle(logger=log, name=name, component=component_name)
    for key, value in (metadata or {}).items():
        handle.add_metadata(key, value)

    with ExitStack() as stack:
        for key, value in handle.metadata.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "PRESETS",
    "SpanHandle",
    "TelemetrySettings",
    "build_config",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
