"""Structured logging for monadic transforms.

Transforms never raise, so a failed bind/map is invisible until someone
unwraps. These loggers make the moment of failure observable: each entry
is an event name plus structured fields (operation, monad, error type, ...).

- Loggers are immutable; bind() returns a new one
- Output goes through a renderer: console text, JSON lines, or nothing
- Level and renderer come from `configure_logging`, else from settings

Quick Start:
    >>> from carrier.runtime.logging import get_logger, configure_logging
    >>>
    >>> configure_logging(format="console", level="DEBUG")
    >>> log = get_logger("pipeline", monad="result")
    >>> log.debug("callback raised", operation="bind", error="ValueError")
    # => 10:30:45.123 [debug] callback raised operation="bind" error="ValueError" logger="pipeline" monad="result"
"""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Protocol, TextIO, runtime_checkable

import orjson

from carrier.foundation.config import get_settings
from carrier.foundation.errors import JsonDict, JsonValue

# Fields shown first on console lines, in this order
_LEAD_FIELDS = ("operation",)


# ─────────────────────────────────────────────────────────────────────────────
# Entries & Loggers
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class LogEntry:
    """One emitted event."""

    timestamp: float
    level: str
    event: str
    context: JsonDict

    @property
    def ts_iso(self) -> str:
        return datetime.fromtimestamp(self.timestamp, tz=UTC).isoformat()

    @property
    def ts_human(self) -> str:
        """HH:MM:SS.mmm in UTC."""
        stamp = datetime.fromtimestamp(self.timestamp, tz=UTC)
        return f"{stamp:%H:%M:%S}.{stamp.microsecond // 1000:03d}"


@dataclass(frozen=True, slots=True)
class BoundLogger:
    """Logger with bound context fields.

    `renderer` and `level` pin output for this logger only; left as None they
    follow the global configuration at emit time, so module-level loggers
    pick up `configure_logging` calls made after import.

    Example:
        >>> log = BoundLogger(context={"monad": "result"})
        >>> log.bind(operation="map").info("transform failed")
        # => 10:30:45.123 [info] transform failed operation="map" monad="result"
    """

    context: JsonDict = field(default_factory=dict)
    renderer: LogRenderer | None = None
    level: int | None = None

    def bind(self, **kw: JsonValue) -> BoundLogger:
        return replace(self, context={**self.context, **kw})

    def unbind(self, *keys: str) -> BoundLogger:
        return replace(self, context={k: v for k, v in self.context.items() if k not in keys})

    def is_enabled_for(self, level: int) -> bool:
        threshold = self.level if self.level is not None else _active_level()
        return level >= threshold

    def debug(self, event: str, **kw: JsonValue) -> None:
        self._emit(logging.DEBUG, event, kw)

    def info(self, event: str, **kw: JsonValue) -> None:
        self._emit(logging.INFO, event, kw)

    def warning(self, event: str, **kw: JsonValue) -> None:
        self._emit(logging.WARNING, event, kw)

    def error(self, event: str, **kw: JsonValue) -> None:
        self._emit(logging.ERROR, event, kw)

    def _emit(self, level: int, event: str, fields: JsonDict) -> None:
        if not self.is_enabled_for(level):
            return
        # scoped < bound < call-site
        context = {**_scoped.get(), **self.context, **fields}
        entry = LogEntry(time.time(), logging.getLevelName(level).lower(), event, context)
        (self.renderer or _active_renderer()).render(entry)


# ─────────────────────────────────────────────────────────────────────────────
# Renderers
# ─────────────────────────────────────────────────────────────────────────────


@runtime_checkable
class LogRenderer(Protocol):
    def render(self, entry: LogEntry) -> None: ...


@dataclass(slots=True)
class ConsoleRenderer:
    """One line per entry: `time [level] event operation=... key=value ...`.

    `operation` leads, remaining fields are sorted by key. Colors are
    auto-detected from the output stream when `colors` is None.
    """

    output: TextIO = field(default_factory=lambda: sys.stderr)
    colors: bool | None = None
    show_timestamp: bool = True

    def __post_init__(self) -> None:
        if self.colors is None:
            isatty = getattr(self.output, "isatty", None)
            self.colors = bool(isatty and isatty())

    def render(self, entry: LogEntry) -> None:
        paint = _painter(bool(self.colors))
        line: list[str] = []
        if self.show_timestamp:
            line.append(paint("dim", entry.ts_human))
        line.append(paint(_LEVEL_STYLE.get(entry.level, "dim"), f"[{entry.level}]"))
        line.append(paint("bold", entry.event))
        ordered = [k for k in _LEAD_FIELDS if k in entry.context]
        ordered += sorted(k for k in entry.context if k not in _LEAD_FIELDS)
        line += [f"{paint('cyan', key)}={_console_value(entry.context[key], paint)}" for key in ordered]
        print(" ".join(line), file=self.output)


@dataclass(slots=True)
class JsonRenderer:
    """JSON Lines via orjson. Exceptions and classes are rendered by name."""

    output: TextIO = field(default_factory=lambda: sys.stdout)

    def render(self, entry: LogEntry) -> None:
        record = {"timestamp": entry.ts_iso, "level": entry.level, "event": entry.event, **entry.context}
        self.output.write(orjson.dumps(record, default=_json_default, option=orjson.OPT_APPEND_NEWLINE).decode())


@dataclass(slots=True)
class NoOpRenderer:
    """Discards everything."""

    def render(self, entry: LogEntry) -> None:
        return None


# ─────────────────────────────────────────────────────────────────────────────
# Global Configuration
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class _Configured:
    renderer: LogRenderer
    level: int


_configured: ContextVar[_Configured | None] = ContextVar("carrier_logging", default=None)
_scoped: ContextVar[JsonDict] = ContextVar("carrier_log_context", default={})
_settings_renderers: dict[str, LogRenderer] = {}


def _make_renderer(format: str, output: TextIO | None = None, colors: bool | None = None) -> LogRenderer:  # noqa: A002
    match format:
        case "console":
            return ConsoleRenderer(output=output or sys.stderr, colors=colors)
        case "json":
            return JsonRenderer(output=output or sys.stdout)
        case "none":
            return NoOpRenderer()
        case _:
            raise ValueError(f"Unknown format: {format!r}. Use 'console', 'json', or 'none'")


def configure_logging(
    format: str = "console",  # noqa: A002
    level: str = "INFO",
    *,
    output: TextIO | None = None,
    colors: bool | None = None,
) -> LogRenderer:
    """Set the renderer and level for every logger without its own."""
    renderer = _make_renderer(format, output, colors)
    _configured.set(_Configured(renderer, _level_number(level)))
    return renderer


def reset_logging() -> None:
    """Forget `configure_logging`; settings apply again."""
    _configured.set(None)


def get_logger(name: str | None = None, **initial_context: JsonValue) -> BoundLogger:
    """Logger with `initial_context`, plus `logger=name` when a name is given."""
    if name:
        initial_context["logger"] = name
    return BoundLogger(context=initial_context)


@contextmanager
def log_context(**kw: JsonValue) -> Iterator[None]:
    """Add fields to every entry emitted inside the block.

    Example:
        >>> with log_context(request_id="r1"):
        ...     get_logger().info("inside")  # carries request_id
    """
    token = _scoped.set({**_scoped.get(), **kw})
    try:
        yield
    finally:
        _scoped.reset(token)


def _active_level() -> int:
    if (configured := _configured.get()) is not None:
        return configured.level
    return _level_number(get_settings().logging.level)


def _active_renderer() -> LogRenderer:
    if (configured := _configured.get()) is not None:
        return configured.renderer
    # Follows the current settings; only the renderer per format is reused
    fmt = get_settings().logging.format
    if fmt not in _settings_renderers:
        _settings_renderers[fmt] = _make_renderer(fmt)
    return _settings_renderers[fmt]


# ─────────────────────────────────────────────────────────────────────────────
# Formatting
# ─────────────────────────────────────────────────────────────────────────────


_ANSI = {"reset": "\033[0m", "bold": "\033[1m", "dim": "\033[2m", "red": "\033[31m",
         "green": "\033[32m", "yellow": "\033[33m", "blue": "\033[34m", "cyan": "\033[36m"}
_LEVEL_STYLE = {"debug": "dim", "info": "green", "warning": "yellow", "error": "red", "critical": "red"}


def _level_number(level: str) -> int:
    number = logging.getLevelName(level.upper())
    return number if isinstance(number, int) else logging.INFO


def _painter(enabled: bool):
    if not enabled:
        return lambda style, text: text
    return lambda style, text: f"{_ANSI[style]}{text}{_ANSI['reset']}"


def _console_value(v: object, paint) -> str:
    match v:
        case bool():
            return paint("blue", str(v).lower())
        case int() | float():
            return paint("blue", str(v))
        case str():
            return paint("yellow", f'"{v}"')
        case type():
            return v.__qualname__
        case BaseException():
            return paint("red", f"{type(v).__name__}({str(v)!r})")
        case list() | tuple() | dict():
            return paint("dim", f"<{len(v)} items>")
        case _:
            return repr(v)


def _json_default(v: object) -> JsonValue:
    if isinstance(v, type):
        return v.__qualname__
    if isinstance(v, BaseException):
        return {"type": type(v).__name__, "message": str(v)}
    return repr(v)
