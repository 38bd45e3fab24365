"""Runtime switches for carrier, read from CARRIER_* environment variables.

The containers themselves hold no configuration. These settings only decide
how callback failures are recorded and where traces and log lines go.

Example:
    >>> from carrier.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.logging.level
    'INFO'
    >>> settings.trace_channel
    'traces'

    # Overridden by, e.g.:
    # CARRIER_LOG_LEVEL=DEBUG
    # CARRIER_WRAP_CALLBACK_ERRORS=true
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Level and output format of the carrier loggers (CARRIER_LOG_*)."""

    model_config = SettingsConfigDict(
        env_prefix="CARRIER_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class CarrierSettings(BaseSettings):
    """Root settings for carrier.

    Loads configuration from environment variables with CARRIER_ prefix.

    Example environment variables:
        CARRIER_WRAP_CALLBACK_ERRORS=true
        CARRIER_CAPTURE_TRACEBACKS=true
        CARRIER_TRACE_CHANNEL=audit
        CARRIER_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="CARRIER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    wrap_callback_errors: bool = Field(
        default=False,
        description="Store callback exceptions as PropagatedError instead of the raw exception",
    )
    capture_tracebacks: bool = Field(
        default=False,
        description="Attach formatted tracebacks to PropagatedError details",
    )
    trace_channel: Annotated[str, Field(min_length=1)] = "traces"

    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> CarrierSettings:
    """Process-wide settings, read once and cached.

    Example:
        >>> get_settings().wrap_callback_errors
        False
    """
    return CarrierSettings()


def clear_settings_cache() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
