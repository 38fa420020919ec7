"""Structured logging for the edit engine, built on telelog.

Engine code produces two kinds of records:

* spans named ``<component>::<operation>`` (``engine::insert_char``,
  ``buffer::split_line``, ``keymaps::translate``). Each profiles one unit of
  work and is tracked under its ``<component>`` prefix.
* events named ``<namespace>.<what>`` (``history.commit``, ``engine.invalid``,
  ``collaborator.failure``) carrying a key/value payload. The namespace picks
  the default level.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "EDIT_ENGINE_"
LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "edit_engine")

LEVELS = ("debug", "info", "warning", "error")

_EVENT_LEVELS = {
    "history": "debug",
    "engine": "warning",
    "collaborator": "error",
}

_loggers: MutableMapping[str, Any] = {}
_config: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str) -> bool:
    return (_env(name) or "").strip().lower() in {"1", "true", "yes", "on"}


def _pairs(data: Mapping[str, Any]) -> List[Tuple[str, str]]:
    return [(str(key), value if isinstance(value, str) else str(value)) for key, value in data.items()]


def _build_config(*, quiet: bool) -> Any:
    config = tl.Config()
    if quiet:
        # Full-screen hosts own the terminal; only a log file may receive records.
        config.with_min_level("WARNING")
        config.with_console_output(False)
    else:
        config.with_min_level((_env("LOG_LEVEL") or "INFO").upper())
        config.with_console_output(not _env_flag("DISABLE_CONSOLE"))
        config.with_colored_output(not _env_flag("NO_COLOR"))
        if _env_flag("LOG_JSON"):
            config.with_json_format(True)
    log_file = _env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Install the telelog configuration used by every engine logger.

    Without arguments the configuration comes from ``EDIT_ENGINE_*``
    variables. ``preset="quiet"`` silences the console for TUI hosts.
    """

    global _config
    if config is not None and preset is not None:
        raise ValueError("Provide either `config` or `preset`, not both.")
    if preset not in (None, "quiet"):
        raise ValueError(f"Unknown preset '{preset}'.")

    if config is None:
        config = _build_config(quiet=preset == "quiet")
    config.with_profiling(True)
    _config = config
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    logger_name = name or LOGGER_NAME
    if logger_name not in _loggers:
        if _config is None:
            configure()
        _loggers[logger_name] = tl.Logger.with_config(logger_name, _config)
    return _loggers[logger_name]


def _emit(log: Any, level: str, message: str, fields: Mapping[str, Any]) -> None:
    if level not in LEVELS:
        raise ValueError(f"Unsupported log level '{level}'.")
    structured = getattr(log, f"{level}_with", None)
    if structured is not None:
        structured(message, _pairs(fields))
    else:
        getattr(log, level)(f"{message} {dict(_pairs(fields))}")


def record_event(
    name: str,
    *,
    data: Optional[Mapping[str, Any]] = None,
    level: Optional[str] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>``; ``level`` defaults from the event namespace."""

    namespace = name.split(".", 1)[0]
    resolved = level or _EVENT_LEVELS.get(namespace, "info")
    _emit(get_logger(logger_name), resolved, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Yielded by ``span``; collects metadata reported if the block fails."""

    logger: Any
    name: str
    component: str
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = value if isinstance(value, str) else str(value)

    def fail(self, reason: str) -> None:
        _emit(
            self.logger,
            "error",
            "span::fail",
            {"span": self.name, "component": self.component, **self.metadata, "reason": reason},
        )


@contextmanager
def span(
    name: str,
    *,
    metadata: Optional[Mapping[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> Iterator[SpanHandle]:
    """Profile ``name`` with ``metadata`` attached as logger context."""

    log = get_logger(logger_name)
    handle = SpanHandle(logger=log, name=name, component=name.split("::", 1)[0])
    for key, value in (metadata or {}).items():
        handle.add_metadata(key, value)

    with ExitStack() as stack:
        stack.enter_context(log.track_component(handle.component))
        stack.enter_context(log.profile(name))
        context_keys = list(handle.metadata)
        for key in context_keys:
            log.add_context(key, handle.metadata[key])
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in context_keys:
                log.remove_context(key)


__all__ = [
    "ENV_PREFIX",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
