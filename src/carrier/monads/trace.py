"""Trace entries written to a Writer's trace channel."""

from __future__ import annotations

import time
import traceback
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@runtime_checkable
class Trace(Protocol):
    """Anything with a readable message and a timestamp."""

    def read(self) -> str: ...
    def at(self) -> float: ...


@dataclass(frozen=True, slots=True)
class TraceMessage:
    """Plain message trace."""

    message: str
    timestamp: float = field(default_factory=time.time)

    def read(self) -> str:
        return self.message

    def at(self) -> float:
        return self.timestamp


@dataclass(frozen=True, slots=True)
class TraceException:
    """Trace built from an exception. `read()` renders type, message and traceback."""

    exception: BaseException
    timestamp: float = field(default_factory=time.time)

    def read(self) -> str:
        frames = "".join(traceback.format_tb(self.exception.__traceback__)).rstrip()
        head = f"{type(self.exception).__name__} | {self.exception}"
        return f"{head} | {frames}" if frames else head

    def at(self) -> float:
        return self.timestamp


def trace(message: str, at: float | None = None) -> TraceMessage:
    """Create TraceMessage concisely."""
    return TraceMessage(message) if at is None else TraceMessage(message, at)
