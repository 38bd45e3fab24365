"""Result monad threading an Env and a Writer through every transform.

A Result is Ok(value) or Err(error) plus two side channels:
- Env: read-only dependencies, never altered by bind/map
- Writer: append-only log, merged across bind/apply

Transforms never raise. A callback that raises, returns the wrong shape, or
asks for a missing dependency yields an Err that keeps the current Env and
Writer. `unwrap()` on an Err is the one place the stored error is re-raised.

Contracts:
- bind: T -> Result[U]  (plain value return is an error)
- map:  T -> U          (Result return is an error)
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar, cast

from carrier.foundation.config import get_settings
from carrier.foundation.errors import (
    CarrierException,
    InvalidArgument,
    InvalidCallbackResult,
    InvalidState,
    NotCallable,
    PropagatedError,
    as_error,
)
from carrier.runtime.logging import get_logger

from .env import RESOLVE_ERRORS, Env, EnvView, is_dependency
from .writer import Writer

if TYPE_CHECKING:
    from .trace import Trace

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")

_log = get_logger("carrier.monads")


def _propagated(operation: str, exc: Exception) -> BaseException:
    """Error payload for an exception raised inside a user callback."""
    _log.debug("callback raised", operation=operation, error=type(exc).__name__, message=str(exc))
    settings = get_settings()
    if settings.wrap_callback_errors and not isinstance(exc, CarrierException):
        return PropagatedError.wrap(operation, exc, include_trace=settings.capture_tracebacks)
    return exc


def _expected_result(operation: str, got: object, plain_alternative: str) -> InvalidCallbackResult:
    _log.debug("callback returned plain value", operation=operation, got=type(got).__name__)
    return InvalidCallbackResult.create(
        operation,
        f"{operation}() expected a Result return (T -> Result[U]), but got {type(got).__name__}. "
        f"If you want to return a plain value use {plain_alternative}() instead.",
    )


def _expected_plain(operation: str, container: str, bind_alternative: str) -> InvalidCallbackResult:
    _log.debug("callback returned container", operation=operation, container=container)
    return InvalidCallbackResult.create(
        operation,
        f"{operation}() must return a plain value (T -> U). It cannot return a {container}. "
        f"If your function returns a {container}, use {bind_alternative}() instead.",
    )


def _unresolved(exc: CarrierException) -> CarrierException:
    _log.debug("dependency unresolved", operation=exc.operation, code=exc.code, message=str(exc))
    return exc


def _non_dependencies(operation: str, dependencies: Iterable[object]) -> InvalidArgument | None:
    """InvalidArgument naming the first non-instance argument, or None when all are usable."""
    for dep in dependencies:
        if not is_dependency(dep):
            _log.debug("invalid dependency", operation=operation, got=type(dep).__name__)
            return InvalidArgument.create(
                operation, f"{operation}() expects object instances as dependencies, got {type(dep).__name__}",
            )
    return None


class Result(Generic[T]):
    """Ok/Err container carrying an Env and a Writer.

    The state is a boolean discriminator on one class: there are no Ok/Err
    subclasses, so `isinstance(x, Result)` is the only shape check needed.

    Examples:
        >>> Result.ok(2).map(lambda v: v * 3).unwrap()
        6
        >>> Result.ok(1).bind(lambda v: v + 1).is_err()
        True

        Dependencies and logs travel with the value:
        >>> class Inc:
        ...     def inc(self, v: int) -> int: return v + 1
        >>> r = (
        ...     Result.ok(10)
        ...     .with_env(Inc())
        ...     .write_to("log", "start")
        ...     .bind_with_env([Inc], lambda v, env: Result.ok(env[Inc].inc(v)))
        ... )
        >>> r.unwrap(), r.writer_output("log")
        (11, ['start'])

    Notes:
        - Uses __slots__; every operation returns a new Result
        - Callback exceptions are captured with `except Exception`, so
          KeyboardInterrupt and SystemExit still propagate
    """

    __slots__ = ("_ok", "_value", "_env", "_writer")
    __match_args__ = ("_value",)

    def __init__(self, is_ok: bool, value: Any, env: Env | None = None, writer: Writer | None = None) -> None:
        """Private constructor. Use Result.ok()/Result.err() or Ok()/Err() instead."""
        self._ok: bool = is_ok
        self._value: Any = value if is_ok else as_error(value)
        self._env: Env = env if env is not None else Env.empty()
        self._writer: Writer = writer if writer is not None else Writer.empty()

    # ─────────────────────────────────────────────────────────────────
    # Constructors
    # ─────────────────────────────────────────────────────────────────

    @classmethod
    def ok(cls, value: T, env: Env | None = None, writer: Writer | None = None) -> Result[T]:
        return cls(True, value, env, writer)

    @classmethod
    def err(cls, error: object, env: Env | None = None, writer: Writer | None = None) -> Result[T]:
        """Err from an exception, a Fault, or any value (stringified into a FaultError)."""
        return cls(False, error, env, writer)

    # ─────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────

    def is_ok(self) -> bool:
        return self._ok

    def is_err(self) -> bool:
        return not self._ok

    # ─────────────────────────────────────────────────────────────────
    # Lift / Fail
    # ─────────────────────────────────────────────────────────────────

    def lift(self, value: U) -> Result[U]:
        """Replace the value, keeping Env and Writer. No-op on Err."""
        if not self._ok:
            return cast(Result[U], self)
        return Result(True, value, self._env, self._writer)

    def fail(self, error: object) -> Result[Any]:
        """Turn into Err(error), keeping Env and Writer, whatever the current state."""
        return Result(False, error, self._env, self._writer)

    # ─────────────────────────────────────────────────────────────────
    # bind | bind_with_env
    # ─────────────────────────────────────────────────────────────────

    def bind(self, fn: Callable[[T], Result[U]]) -> Result[U]:
        """Monadic bind. `fn` must return a Result.

        The outcome keeps this Env; its Writer is this Writer merged with the
        returned Result's Writer.
        """
        if not self._ok:
            return cast(Result[U], self)
        try:
            out = fn(self._value)
        except Exception as e:
            return self.fail(_propagated("bind", e))
        return self._chain("bind", out, "map")

    def bind_with_env(self, dependencies: Iterable[type], fn: Callable[[T, EnvView], Result[U]]) -> Result[U]:
        """bind() with dependencies resolved from this Env, passed as `fn(value, env_view)`."""
        if not self._ok:
            return cast(Result[U], self)
        try:
            view = self._env.resolve(dependencies, "bind_with_env")
        except RESOLVE_ERRORS as e:
            return self.fail(_unresolved(e))
        try:
            out = fn(self._value, view)
        except Exception as e:
            return self.fail(_propagated("bind_with_env", e))
        return self._chain("bind_with_env", out, "map_with_env")

    def _chain(self, operation: str, out: object, plain_alternative: str) -> Result[Any]:
        if isinstance(out, Result):
            return Result(out._ok, out._value, self._env, self._writer.merge(out._writer))
        return self.fail(_expected_result(operation, out, plain_alternative))

    # ─────────────────────────────────────────────────────────────────
    # map | map_with_env
    # ─────────────────────────────────────────────────────────────────

    def map(self, fn: Callable[[T], U]) -> Result[U]:
        """Functor map. `fn` must return a plain value; Env and Writer unchanged."""
        if not self._ok:
            return cast(Result[U], self)
        try:
            out = fn(self._value)
        except Exception as e:
            return self.fail(_propagated("map", e))
        return self._lift_plain("map", out, "bind")

    def map_with_env(self, dependencies: Iterable[type], fn: Callable[[T, EnvView], U]) -> Result[U]:
        """map() with dependencies resolved from this Env, passed as `fn(value, env_view)`."""
        if not self._ok:
            return cast(Result[U], self)
        try:
            view = self._env.resolve(dependencies, "map_with_env")
        except RESOLVE_ERRORS as e:
            return self.fail(_unresolved(e))
        try:
            out = fn(self._value, view)
        except Exception as e:
            return self.fail(_propagated("map_with_env", e))
        return self._lift_plain("map_with_env", out, "bind_with_env")

    def _lift_plain(self, operation: str, out: object, bind_alternative: str) -> Result[Any]:
        if isinstance(out, Result):
            return self.fail(_expected_plain(operation, "Result", bind_alternative))
        return self.lift(out)

    # ─────────────────────────────────────────────────────────────────
    # Applicative
    # ─────────────────────────────────────────────────────────────────

    def apply(self, fn_result: Result[Callable[[T], U]]) -> Result[U]:
        """Apply the function held by `fn_result` to this value.

        The first Err wins (this, then `fn_result`). The Writer of the outcome
        is this Writer merged with `fn_result`'s.
        """
        if not self._ok:
            return cast(Result[U], self)
        writer = self._writer.merge(fn_result._writer)
        if not fn_result._ok:
            return Result(False, fn_result._value, self._env, writer)
        return self._invoke_applied("apply", fn_result._value, (self._value,), writer)

    def apply_with_env(
        self,
        fn_result: Result[Callable[[T, EnvView], U]],
        dependencies: Iterable[type] = (),
    ) -> Result[U]:
        """apply() where the function is called as `fn(value, env_view)`."""
        if not self._ok:
            return cast(Result[U], self)
        writer = self._writer.merge(fn_result._writer)
        if not fn_result._ok:
            return Result(False, fn_result._value, self._env, writer)
        try:
            view = self._env.resolve(dependencies, "apply_with_env")
        except RESOLVE_ERRORS as e:
            return Result(False, _unresolved(e), self._env, writer)
        return self._invoke_applied("apply_with_env", fn_result._value, (self._value, view), writer)

    def _invoke_applied(self, operation: str, fn: object, args: tuple[Any, ...], writer: Writer) -> Result[Any]:
        if not callable(fn):
            _log.debug("applied value not callable", operation=operation, got=type(fn).__name__)
            error: BaseException = NotCallable.create(
                operation, f"{operation}() expected a callable inside the Result, got {type(fn).__name__}",
            )
            return Result(False, error, self._env, writer)
        try:
            out = fn(*args)
        except Exception as e:
            return Result(False, _propagated(operation, e), self._env, writer)
        if isinstance(out, Result):
            return Result(False, _expected_plain(operation, "Result", "bind"), self._env, writer)
        return Result(True, out, self._env, writer)

    # ─────────────────────────────────────────────────────────────────
    # Inspection
    # ─────────────────────────────────────────────────────────────────

    def inspect_ok(self, fn: Callable[[T], object]) -> Result[T]:
        """Call `fn` with the value for side effects, return self."""
        if self._ok:
            fn(self._value)
        return self

    def inspect_err(self, fn: Callable[[BaseException], object]) -> Result[T]:
        """Call `fn` with the error for side effects, return self."""
        if not self._ok:
            fn(self._value)
        return self

    # ─────────────────────────────────────────────────────────────────
    # Unwrap | Fold
    # ─────────────────────────────────────────────────────────────────

    def unwrap(self) -> T:
        """Extract the value.

        Raises:
            BaseException: The stored error, if Err
        """
        if not self._ok:
            raise self._value
        return cast(T, self._value)

    def unwrap_err(self) -> BaseException:
        """Extract the error.

        Raises:
            InvalidState: If Ok
        """
        if self._ok:
            raise InvalidState.create("unwrap_err", "cannot unwrap error of Ok")
        return cast(BaseException, self._value)

    def unwrap_or(self, default: T) -> T:
        return cast(T, self._value) if self._ok else default

    def unwrap_or_else(self, fn: Callable[[], T]) -> T:
        """Value if Ok, else `fn()`."""
        return cast(T, self._value) if self._ok else fn()

    def value(self) -> T | None:
        return cast(T, self._value) if self._ok else None

    def error(self) -> BaseException | None:
        return None if self._ok else cast(BaseException, self._value)

    def fold(self, on_ok: Callable[[T], R], on_err: Callable[[BaseException], R]) -> R:
        """Exhaustive case analysis."""
        return on_ok(self._value) if self._ok else on_err(self._value)

    def fold_with_env(
        self,
        on_ok: Callable[[T, Env, Writer], R],
        on_err: Callable[[BaseException, Env, Writer], R],
    ) -> R:
        """fold() whose callbacks also receive the Env and Writer."""
        if self._ok:
            return on_ok(self._value, self._env, self._writer)
        return on_err(self._value, self._env, self._writer)

    # ─────────────────────────────────────────────────────────────────
    # Env
    # ─────────────────────────────────────────────────────────────────

    def env(self) -> Env:
        return self._env

    def with_env(self, *dependencies: object) -> Result[T]:
        """Add or replace dependencies. A non-instance argument turns this into Err(InvalidArgument)."""
        if (invalid := _non_dependencies("with_env", dependencies)) is not None:
            return self.fail(invalid)
        env = self._env
        for dep in dependencies:
            env = env.with_(dep)
        return Result(self._ok, self._value, env, self._writer)

    # ─────────────────────────────────────────────────────────────────
    # Writer
    # ─────────────────────────────────────────────────────────────────

    def writer(self) -> Writer:
        return self._writer

    def write_to(self, channel: str, value: Any) -> Result[T]:
        return Result(self._ok, self._value, self._env, self._writer.write(channel, value))

    def writer_output(self, channel: str) -> list[Any]:
        return self._writer.get(channel)

    def with_trace(self, trace: Trace) -> Result[T]:
        """Append `trace` to the configured trace channel."""
        return self.write_to(get_settings().trace_channel, trace)

    def traces(self) -> list[Trace]:
        return self._writer.get(get_settings().trace_channel)

    # ─────────────────────────────────────────────────────────────────
    # Dunder Methods
    # ─────────────────────────────────────────────────────────────────

    def __bool__(self) -> bool:
        """True if Ok."""
        return self._ok

    def __repr__(self) -> str:
        variant = "Ok" if self._ok else "Err"
        return f"{variant}({self._value!r})"

    def __eq__(self, other: object) -> bool:
        """Structural equality over state, payload, Env and Writer."""
        if not isinstance(other, Result):
            return NotImplemented
        return (
            self._ok == other._ok
            and self._value == other._value
            and self._env == other._env
            and self._writer == other._writer
        )

    __hash__ = None  # type: ignore[assignment]

    def __iter__(self) -> Iterator[T]:
        """Yield the value once if Ok, nothing if Err."""
        if self._ok:
            yield cast(T, self._value)


# ═════════════════════════════════════════════════════════════════════════════
# Constructor Functions
# ═════════════════════════════════════════════════════════════════════════════


def Ok(value: T, env: Env | None = None, writer: Writer | None = None) -> Result[T]:  # noqa: N802
    """Construct Ok variant (success)."""
    return Result(True, value, env, writer)


def Err(error: object, env: Env | None = None, writer: Writer | None = None) -> Result[Any]:  # noqa: N802
    """Construct Err variant (failure)."""
    return Result(False, error, env, writer)
