"""carrier - Composable Result, ResultList and Option containers with Env and Writer side channels.

Fallible, dependency-aware computations compose without exceptions crossing
call boundaries and without shared mutable state. Every container carries:
- an Env: read-only dependencies keyed by type (reader style)
- a Writer: an append-only log with named channels (writer style)

Quick Start:
    >>> from carrier import Result
    >>>
    >>> class Pricing:
    ...     def vat(self, amount: float) -> float:
    ...         return round(amount * 1.21, 2)
    >>>
    >>> total = (
    ...     Result.ok(100.0)
    ...     .with_env(Pricing())
    ...     .write_to("audit", "priced")
    ...     .map_with_env([Pricing], lambda v, env: env[Pricing].vat(v))
    ... )
    >>> total.unwrap()
    121.0
    >>> total.writer_output("audit")
    ['priced']

Failures stay inside the container until unwrap():
    >>> bad = Result.ok(1).bind(lambda v: v + 1)  # bind must return a Result
    >>> bad.is_err()
    True
"""

from __future__ import annotations

__version__ = "0.1.0"

# Errors
from .foundation.errors import (
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
    classify_exception,
)

# Config
from .foundation.config import CarrierSettings, clear_settings_cache, get_settings

# Monads
from .monads import (
    Env,
    Err,
    Nothing,
    Ok,
    Option,
    Railway,
    Result,
    ResultList,
    Some,
    Trace,
    TraceException,
    TraceMessage,
    Writer,
    trace,
)

# Logging
from .runtime.logging import configure_logging, get_logger

__all__ = [
    "__version__",
    # Monads
    "Result", "Ok", "Err", "ResultList", "Option", "Some", "Nothing",
    "Env", "Writer", "Railway",
    "Trace", "TraceMessage", "TraceException", "trace",
    # Errors
    "ErrorCode", "MonadError", "CarrierException", "classify_exception",
    "MissingDependency", "InvalidCallbackResult", "NotCallable", "InvalidArgument",
    "PropagatedError", "EmptyCollection", "WrongArity", "InvalidState",
    "Fault", "FaultError",
    # Config
    "CarrierSettings", "get_settings", "clear_settings_cache",
    # Logging
    "configure_logging", "get_logger",
]
