"""Shared type aliases and the Fault record for domain-level failures."""

from __future__ import annotations

from typing import Any, Self, Union

from pydantic import BaseModel, ConfigDict, Field

from .errors import CarrierException, ErrorCode, MonadError

# ═══════════════════════════════════════════════════════════════════════════════
# Type Aliases
# ═══════════════════════════════════════════════════════════════════════════════

JsonPrimitive = Union[str, int, float, bool, None]
JsonValue = Union[JsonPrimitive, list[Any], dict[str, Any]]
JsonDict = dict[str, Any]

# ═══════════════════════════════════════════════════════════════════════════════
# Fault
# ═══════════════════════════════════════════════════════════════════════════════


class Fault(BaseModel):
    """Domain failure description: message, integer code, optional previous error.

    Faults are values; `Result.err(fault)` / `result.fail(fault)` store them as a
    `FaultError` so that `unwrap()` has something to raise.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    message: str
    code: int = 0
    previous: BaseException | None = Field(default=None, repr=False)

    @classmethod
    def due_to(cls, message: str, code: int = 0, previous: BaseException | None = None) -> Self:
        return cls(message=message, code=code, previous=previous)

    def to_exception(self) -> FaultError:
        return FaultError(self)


class FaultError(CarrierException):
    """Exception form of a Fault. `previous` becomes the exception cause."""

    code = ErrorCode.FAULT

    def __init__(self, fault: Fault) -> None:
        super().__init__(MonadError(operation="", message=fault.message, code=ErrorCode.FAULT))
        self.fault = fault
        if fault.previous is not None:
            self.__cause__ = fault.previous

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FaultError):
            return NotImplemented
        return self.fault == other.fault

    def __hash__(self) -> int:
        return hash((self.fault.message, self.fault.code))


def as_error(error: object) -> BaseException:
    """Normalize an error payload: exceptions pass, Faults and anything else become FaultError."""
    if isinstance(error, BaseException):
        return error
    if isinstance(error, Fault):
        return FaultError(error)
    return FaultError(Fault.due_to(str(error)))
