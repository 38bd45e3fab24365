"""Failure taxonomy stored inside Err values and raised by terminal accessors.

- ErrorCode: Standard codes for composition failures
- MonadError/CarrierException: Structured error record and its exception form
- MissingDependency, InvalidCallbackResult, ...: The failure taxonomy
- Fault/FaultError: Domain-level failures carried through Result.fail()
"""

from .errors import (
    CarrierException,
    EmptyCollection,
    ErrorCode,
    InvalidArgument,
    InvalidCallbackResult,
    InvalidState,
    MissingDependency,
    MonadError,
    NotCallable,
    PropagatedError,
    WrongArity,
    classify_exception,
)
from .types import Fault, FaultError, JsonDict, JsonPrimitive, JsonValue, as_error

__all__ = [
    # Core errors
    "ErrorCode", "MonadError", "CarrierException", "classify_exception",
    # Taxonomy
    "MissingDependency", "InvalidCallbackResult", "NotCallable", "InvalidArgument",
    "PropagatedError", "EmptyCollection", "WrongArity", "InvalidState",
    # Faults
    "Fault", "FaultError", "as_error",
    # JSON aliases
    "JsonDict", "JsonPrimitive", "JsonValue",
]
