"""Option monad: Some(value) or Nothing, with the same Env/Writer side channels as Result.

Same bind/map contracts as Result, but every failure path (wrong-shaped
callback return, exception, missing dependency, invalid dependency) degrades
to Nothing. The cause is not kept: Option is lossy by design. Use Result
when the reason for an absence matters.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any, Callable, Generic, TypeVar, cast

from carrier.foundation.errors import InvalidState
from carrier.runtime.logging import get_logger

from .env import RESOLVE_ERRORS, Env, EnvView, is_dependency
from .result import Result
from .writer import Writer

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")

_log = get_logger("carrier.monads", monad="option")


class Option(Generic[T]):
    """Some/Nothing container carrying an Env and a Writer.

    Example:
        >>> Option.some(2).map(lambda v: v * 2).unwrap()
        4
        >>> Option.some(1).map(lambda v: Option.some(v)).is_none()
        True
        >>> Option.of(None).unwrap_or(0)
        0
    """

    __slots__ = ("_some", "_value", "_env", "_writer")

    def __init__(self, is_some: bool, value: Any = None, env: Env | None = None, writer: Writer | None = None) -> None:
        """Private constructor. Use Option.some()/Option.none() or Some()/Nothing() instead."""
        self._some: bool = is_some
        self._value: Any = value if is_some else None
        self._env: Env = env if env is not None else Env.empty()
        self._writer: Writer = writer if writer is not None else Writer.empty()

    # ─────────────────────────────────────────────────────────────────
    # Constructors
    # ─────────────────────────────────────────────────────────────────

    @classmethod
    def some(cls, value: T, env: Env | None = None, writer: Writer | None = None) -> Option[T]:
        return cls(True, value, env, writer)

    @classmethod
    def none(cls, env: Env | None = None, writer: Writer | None = None) -> Option[Any]:
        return cls(False, None, env, writer)

    @classmethod
    def of(cls, value: T | None, env: Env | None = None, writer: Writer | None = None) -> Option[T]:
        """Some(value), or Nothing when `value` is None."""
        return cls(value is not None, value, env, writer)

    # ─────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────

    def is_some(self) -> bool:
        return self._some

    def is_none(self) -> bool:
        return not self._some

    def _nothing(self, operation: str, reason: str) -> Option[Any]:
        _log.debug("degraded to nothing", operation=operation, reason=reason)
        return Option(False, None, self._env, self._writer)

    # ─────────────────────────────────────────────────────────────────
    # bind | bind_with_env
    # ─────────────────────────────────────────────────────────────────

    def bind(self, fn: Callable[[T], Option[U]]) -> Option[U]:
        """Monadic bind. `fn` must return an Option; Writers are merged."""
        if not self._some:
            return cast(Option[U], self)
        try:
            out = fn(self._value)
        except Exception as e:
            return self._nothing("bind", type(e).__name__)
        return self._chain("bind", out)

    def bind_with_env(self, dependencies: Iterable[type], fn: Callable[[T, EnvView], Option[U]]) -> Option[U]:
        if not self._some:
            return cast(Option[U], self)
        try:
            view = self._env.resolve(dependencies, "bind_with_env")
        except RESOLVE_ERRORS:
            return self._nothing("bind_with_env", "missing dependency")
        try:
            out = fn(self._value, view)
        except Exception as e:
            return self._nothing("bind_with_env", type(e).__name__)
        return self._chain("bind_with_env", out)

    def _chain(self, operation: str, out: object) -> Option[Any]:
        if isinstance(out, Option):
            return Option(out._some, out._value, self._env, self._writer.merge(out._writer))
        return self._nothing(operation, f"expected Option, got {type(out).__name__}")

    # ─────────────────────────────────────────────────────────────────
    # map | map_with_env
    # ─────────────────────────────────────────────────────────────────

    def map(self, fn: Callable[[T], U | None]) -> Option[U]:
        """Functor map. A None return yields Nothing; an Option return is a contract error."""
        if not self._some:
            return cast(Option[U], self)
        try:
            out = fn(self._value)
        except Exception as e:
            return self._nothing("map", type(e).__name__)
        return self._lift_plain("map", out)

    def map_with_env(self, dependencies: Iterable[type], fn: Callable[[T, EnvView], U | None]) -> Option[U]:
        if not self._some:
            return cast(Option[U], self)
        try:
            view = self._env.resolve(dependencies, "map_with_env")
        except RESOLVE_ERRORS:
            return self._nothing("map_with_env", "missing dependency")
        try:
            out = fn(self._value, view)
        except Exception as e:
            return self._nothing("map_with_env", type(e).__name__)
        return self._lift_plain("map_with_env", out)

    def _lift_plain(self, operation: str, out: object) -> Option[Any]:
        if isinstance(out, Option):
            return self._nothing(operation, "callback returned an Option")
        return Option(out is not None, out, self._env, self._writer)

    # ─────────────────────────────────────────────────────────────────
    # Side-effects / Fold / Unwrap
    # ─────────────────────────────────────────────────────────────────

    def inspect_some(self, fn: Callable[[T], object]) -> Option[T]:
        if self._some:
            fn(self._value)
        return self

    def fold(self, on_some: Callable[[T, Env, Writer], R], on_none: Callable[[None, Env, Writer], R]) -> R:
        """Case analysis; both callbacks also receive the Env and Writer."""
        if self._some:
            return on_some(self._value, self._env, self._writer)
        return on_none(None, self._env, self._writer)

    def unwrap(self) -> T:
        """Extract the value.

        Raises:
            InvalidState: If Nothing
        """
        if not self._some:
            raise InvalidState.create("unwrap", "Cannot unwrap value from Nothing")
        return cast(T, self._value)

    def unwrap_or(self, default: T) -> T:
        return cast(T, self._value) if self._some else default

    def unwrap_or_else(self, fn: Callable[[], T]) -> T:
        return cast(T, self._value) if self._some else fn()

    def value(self) -> T | None:
        return cast("T | None", self._value)

    def to_result(self, error: object) -> Result[T]:
        """Ok(value) or Err(error), keeping Env and Writer."""
        if self._some:
            return Result.ok(self._value, self._env, self._writer)
        return Result.err(error, self._env, self._writer)

    # ─────────────────────────────────────────────────────────────────
    # Env / Writer
    # ─────────────────────────────────────────────────────────────────

    def env(self) -> Env:
        return self._env

    def with_env(self, *dependencies: object) -> Option[T]:
        """Add or replace dependencies. A non-instance argument yields Nothing."""
        env = self._env
        for dep in dependencies:
            if not is_dependency(dep):
                return self._nothing("with_env", f"invalid dependency {type(dep).__name__}")
            env = env.with_(dep)
        return Option(self._some, self._value, env, self._writer)

    def writer(self) -> Writer:
        return self._writer

    def write_to(self, channel: str, value: Any) -> Option[T]:
        return Option(self._some, self._value, self._env, self._writer.write(channel, value))

    def writer_output(self, channel: str) -> list[Any]:
        return self._writer.get(channel)

    # ─────────────────────────────────────────────────────────────────
    # Dunder Methods
    # ─────────────────────────────────────────────────────────────────

    def __bool__(self) -> bool:
        """True if Some."""
        return self._some

    def __repr__(self) -> str:
        return f"Some({self._value!r})" if self._some else "Nothing"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Option):
            return NotImplemented
        return (
            self._some == other._some
            and self._value == other._value
            and self._env == other._env
            and self._writer == other._writer
        )

    __hash__ = None  # type: ignore[assignment]

    def __iter__(self) -> Iterator[T]:
        if self._some:
            yield cast(T, self._value)


def Some(value: T, env: Env | None = None, writer: Writer | None = None) -> Option[T]:  # noqa: N802
    """Construct Some variant."""
    return Option(True, value, env, writer)


def Nothing(env: Env | None = None, writer: Writer | None = None) -> Option[Any]:  # noqa: N802
    """Construct Nothing variant."""
    return Option(False, None, env, writer)
