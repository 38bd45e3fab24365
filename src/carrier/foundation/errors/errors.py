"""Error taxonomy for monadic composition.

Every failure a transform detects is expressed as a `CarrierException` subclass
carrying a frozen `MonadError` record. Transforms never raise these across a
bind/map boundary: they store them inside an Err. Only terminal accessors
(`unwrap`, `unwrap_err`, `Env.read`, `ResultList.head`, ...) raise.
"""

from __future__ import annotations

import traceback
from enum import StrEnum
from typing import ClassVar, Self

from pydantic import BaseModel, ConfigDict


class ErrorCode(StrEnum):
    """Standard codes for composition failures."""
    MISSING_DEPENDENCY = "MISSING_DEPENDENCY"
    INVALID_CALLBACK_RESULT = "INVALID_CALLBACK_RESULT"
    NOT_CALLABLE = "NOT_CALLABLE"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    PROPAGATED_ERROR = "PROPAGATED_ERROR"
    EMPTY_COLLECTION = "EMPTY_COLLECTION"
    WRONG_ARITY = "WRONG_ARITY"
    INVALID_STATE = "INVALID_STATE"
    FAULT = "FAULT"
    UNKNOWN = "UNKNOWN"


class MonadError(BaseModel):
    """Structured description of a composition failure."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    operation: str
    message: str
    code: ErrorCode = ErrorCode.UNKNOWN
    details: str | None = None

    def render(self) -> str:
        """Format as `[CODE] operation: message`."""
        base = f"[{self.code}] {self.operation}: {self.message}" if self.operation else f"[{self.code}] {self.message}"
        return f"{base}\n{self.details}" if self.details else base

    __str__ = render


class CarrierException(Exception):
    """Base exception wrapping a MonadError. Subclasses pin the error code."""

    code: ClassVar[ErrorCode] = ErrorCode.UNKNOWN

    def __init__(self, error: MonadError) -> None:
        self.error = error
        super().__init__(error.message)

    @classmethod
    def create(cls, operation: str, message: str, *, details: str | None = None) -> Self:
        """Build the exception together with its MonadError record."""
        return cls(MonadError(operation=operation, message=message, code=cls.code, details=details))

    @property
    def operation(self) -> str:
        return self.error.operation

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.error.message!r})"


class MissingDependency(CarrierException, LookupError):
    """A requested Env key is absent."""
    code = ErrorCode.MISSING_DEPENDENCY


class InvalidCallbackResult(CarrierException, TypeError):
    """A callback returned the wrong shape (container vs plain value)."""
    code = ErrorCode.INVALID_CALLBACK_RESULT


class NotCallable(CarrierException, TypeError):
    """The applicative function slot does not hold a callable."""
    code = ErrorCode.NOT_CALLABLE


class InvalidArgument(CarrierException, TypeError):
    """A non-instance was passed where a typed dependency is required."""
    code = ErrorCode.INVALID_ARGUMENT


class EmptyCollection(CarrierException, IndexError):
    """A structural accessor was used on an empty collection."""
    code = ErrorCode.EMPTY_COLLECTION


class WrongArity(CarrierException, ValueError):
    """A collection did not hold the number of items an accessor requires."""
    code = ErrorCode.WRONG_ARITY


class InvalidState(CarrierException, ValueError):
    """An accessor was called in a state that forbids it."""
    code = ErrorCode.INVALID_STATE


class PropagatedError(CarrierException):
    """An exception raised inside a user callback, forwarded as the Err payload.

    The original exception is available as `original` and as `__cause__`.
    """

    code = ErrorCode.PROPAGATED_ERROR

    def __init__(self, error: MonadError, original: BaseException) -> None:
        super().__init__(error)
        self.original = original
        self.__cause__ = original

    @classmethod
    def wrap(cls, operation: str, exc: BaseException, *, include_trace: bool = False) -> PropagatedError:
        """Wrap `exc` raised while running `operation`."""
        details = "".join(traceback.format_exception(exc)) if include_trace else None
        error = MonadError(
            operation=operation,
            message=f"{operation}() callback raised {type(exc).__name__}: {exc}",
            code=cls.code,
            details=details,
        )
        return cls(error, exc)


def classify_exception(exc: BaseException) -> ErrorCode:
    """Map any exception to an ErrorCode. Foreign exceptions count as propagated."""
    if isinstance(exc, CarrierException):
        return exc.code
    return ErrorCode.PROPAGATED_ERROR
