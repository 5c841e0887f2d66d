"""Telelog plumbing for edit-set operations.

``configure(settings)`` -- swap the active settings and drop cached loggers
``get_logger(name)`` -- fetch (and cache) a logger built from the settings
``record_event(name, ...)`` -- emit ``event::<name>`` with key/value data
``operation_span(op, ...)`` -- profile one ``EditSet`` operation as ``editset::<op>``
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, Union, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "DIFFSET_"
COMPONENT = "editset"
OPERATIONS = ("concat", "apply", "subtract", "intersect", "validate")
LEVELS = ("debug", "info", "warning", "error")

EventValue = Union[str, int]

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE: Optional["TelemetrySettings"] = None


def _flag(raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class TelemetrySettings:
    """Logger settings, normally read from ``DIFFSET_*`` variables."""

    logger_name: str = "diffset"
    level: str = "info"
    console: bool = True
    color: bool = True
    json: bool = False
    log_file: str = ""
    buffer_size: int = 0  # 0 disables buffering

    def __post_init__(self) -> None:
        level = self.level.lower()
        if level not in LEVELS:
            raise ValueError(f"Unknown log level '{self.level}'. Expected one of {LEVELS}.")
        object.__setattr__(self, "level", level)
        if self.buffer_size < 0:
            raise ValueError("buffer_size must be non-negative")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TelemetrySettings":
        env = os.environ if environ is None else environ

        def read(name: str) -> Optional[str]:
            return env.get(f"{ENV_PREFIX}{name}")

        buffer_size = 0
        if _flag(read("LOG_BUFFERED"), False):
            buffer_size = int(read("LOG_BUFFER_SIZE") or "2048")
        return cls(
            logger_name=read("LOGGER") or "diffset",
            level=read("LOG_LEVEL") or "info",
            console=not _flag(read("DISABLE_CONSOLE"), False),
            color=not _flag(read("NO_COLOR"), False),
            json=_flag(read("LOG_JSON"), False),
            log_file=read("LOG_FILE") or "",
            buffer_size=buffer_size,
        )

    def build(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level.upper())
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.color)
        if self.json:
            config.with_json_format(True)
        if self.log_file:
            config.with_file_output(self.log_file)
        if self.buffer_size:
            config.with_buffering(True)
            config.with_buffer_size(self.buffer_size)
        config.with_profiling(True)
        return config


def configure(settings: Optional[TelemetrySettings] = None) -> TelemetrySettings:
    """Adopt ``settings`` (or re-read the environment) for new loggers."""

    global _ACTIVE
    _ACTIVE = settings or TelemetrySettings.from_env()
    _LOGGER_CACHE.clear()
    return _ACTIVE


def active_settings() -> TelemetrySettings:
    return _ACTIVE or configure()


def get_logger(name: Optional[str] = None) -> Any:
    settings = active_settings()
    logger_name = name or settings.logger_name
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(logger_name, settings.build())
    return _LOGGER_CACHE[logger_name]


def _pairs(data: Mapping[str, EventValue]) -> list[tuple[str, str]]:
    return [(str(key), str(value)) for key, value in data.items()]


def _emit(log: Any, level: str, message: str, data: Mapping[str, EventValue]) -> None:
    if level not in LEVELS:
        raise ValueError(f"Unsupported log level '{level}'.")
    structured = getattr(log, f"{level}_with", None)
    if structured is not None:
        structured(message, _pairs(data))
    else:
        getattr(log, level)(f"{message} {dict(data)}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Mapping[str, EventValue]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass(slots=True)
class OperationSpan:
    """Counts gathered while one ``EditSet`` operation runs."""

    operation: str
    file_path: str = ""
    counts: Dict[str, int] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return f"{COMPONENT}::{self.operation}"

    def count(self, key: str, value: int) -> None:
        self.counts[key] = int(value)

    def payload(self) -> Dict[str, EventValue]:
        return {"span": self.name, "file": self.file_path, **self.counts}


@contextmanager
def operation_span(
    operation: str,
    *,
    file_path: Optional[str] = None,
    logger_name: Optional[str] = None,
    **counts: int,
) -> Iterator[OperationSpan]:
    """Profile one edit-set operation under the ``editset`` component.

    The counts passed in and those added through ``OperationSpan.count`` are
    logged at debug level when the block finishes, or at error level with
    the failure reason when it raises.
    """

    if operation not in OPERATIONS:
        raise ValueError(f"Unknown edit-set operation '{operation}'.")
    handle = OperationSpan(operation=operation, file_path=file_path or "")
    for key, value in counts.items():
        handle.count(key, value)

    log = get_logger(logger_name)
    log.add_context("file", handle.file_path)
    with ExitStack() as stack:
        stack.enter_context(log.track_component(COMPONENT))
        stack.enter_context(log.profile(handle.name))
        try:
            yield handle
        except Exception as exc:
            _emit(log, "error", "span::fail", {**handle.payload(), "reason": str(exc)})
            raise
        else:
            _emit(log, "debug", "span::done", handle.payload())
        finally:
            log.remove_context("file")


__all__ = [
    "OPERATIONS",
    "OperationSpan",
    "TelemetrySettings",
    "active_settings",
    "configure",
    "get_logger",
    "operation_span",
    "record_event",
]
