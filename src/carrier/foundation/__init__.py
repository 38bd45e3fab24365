"""Foundation - Core building blocks for carrier.

Contains: error taxonomy, faults, config.
"""

from __future__ import annotations

__all__ = [
    # Errors
    "ErrorCode", "MonadError", "CarrierException", "classify_exception",
    "MissingDependency", "InvalidCallbackResult", "NotCallable", "InvalidArgument",
    "PropagatedError", "EmptyCollection", "WrongArity", "InvalidState",
    "Fault", "FaultError", "as_error",
    # Config
    "CarrierSettings", "LoggingSettings", "get_settings", "clear_settings_cache",
]


def __getattr__(name: str):
    """Lazy imports to avoid circular dependencies."""
    if name in ("ErrorCode", "MonadError", "CarrierException", "classify_exception",
                "MissingDependency", "InvalidCallbackResult", "NotCallable", "InvalidArgument",
                "PropagatedError", "EmptyCollection", "WrongArity", "InvalidState",
                "Fault", "FaultError", "as_error"):
        from . import errors
        return getattr(errors, name)

    if name in ("CarrierSettings", "LoggingSettings", "get_settings", "clear_settings_cache"):
        from . import config
        return getattr(config, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
