"""Tests for the error taxonomy and Fault records."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from carrier.foundation.errors import (
    CarrierException,
    EmptyCollection,
    ErrorCode,
    Fault,
    FaultError,
    InvalidArgument,
    InvalidCallbackResult,
    InvalidState,
    MissingDependency,
    MonadError,
    NotCallable,
    PropagatedError,
    WrongArity,
    as_error,
    classify_exception,
)


@pytest.mark.parametrize(
    ("cls", "code", "builtin"),
    [
        (MissingDependency, ErrorCode.MISSING_DEPENDENCY, LookupError),
        (InvalidCallbackResult, ErrorCode.INVALID_CALLBACK_RESULT, TypeError),
        (NotCallable, ErrorCode.NOT_CALLABLE, TypeError),
        (InvalidArgument, ErrorCode.INVALID_ARGUMENT, TypeError),
        (EmptyCollection, ErrorCode.EMPTY_COLLECTION, IndexError),
        (WrongArity, ErrorCode.WRONG_ARITY, ValueError),
        (InvalidState, ErrorCode.INVALID_STATE, ValueError),
    ],
)
def test_taxonomy(cls: type[CarrierException], code: ErrorCode, builtin: type[Exception]) -> None:
    exc = cls.create("op", "went wrong")
    assert isinstance(exc, builtin)
    assert exc.code == code
    assert exc.error.code == code
    assert exc.operation == "op"
    assert str(exc) == "went wrong"
    assert classify_exception(exc) == code


def test_classify_foreign_exception() -> None:
    assert classify_exception(RuntimeError("x")) == ErrorCode.PROPAGATED_ERROR


def test_monad_error_render_and_frozen() -> None:
    err = MonadError(operation="bind", message="bad", code=ErrorCode.INVALID_CALLBACK_RESULT)
    assert err.render() == "[INVALID_CALLBACK_RESULT] bind: bad"
    assert str(err) == err.render()
    assert MonadError(operation="", message="m").render() == "[UNKNOWN] m"
    assert MonadError(operation="x", message="m", details="tb").render().endswith("\ntb")

    with pytest.raises(ValidationError):
        err.message = "changed"  # type: ignore[misc]


def test_propagated_error_wrap() -> None:
    try:
        raise KeyError("k")
    except KeyError as e:
        wrapped = PropagatedError.wrap("map", e, include_trace=True)

    assert wrapped.original.args == ("k",)
    assert wrapped.__cause__ is wrapped.original
    assert "map() callback raised KeyError" in str(wrapped)
    assert wrapped.error.details is not None
    assert "KeyError" in wrapped.error.details
    assert PropagatedError.wrap("map", ValueError("v")).error.details is None


def test_fault_and_fault_error() -> None:
    cause = OSError("disk")
    fault = Fault.due_to("save failed", 5, cause)
    exc = fault.to_exception()

    assert isinstance(exc, FaultError)
    assert exc.fault is fault
    assert exc.__cause__ is cause
    assert str(exc) == "save failed"
    assert exc == FaultError(Fault.due_to("save failed", 5, cause))
    assert classify_exception(exc) == ErrorCode.FAULT


def test_as_error() -> None:
    boom = ValueError("x")
    assert as_error(boom) is boom
    assert isinstance(as_error(Fault.due_to("f")), FaultError)
    converted = as_error(404)
    assert isinstance(converted, FaultError)
    assert converted.fault.message == "404"
