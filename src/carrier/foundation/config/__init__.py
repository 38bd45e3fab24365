"""Settings for callback-error wrapping, trace channel and logging (pydantic-settings)."""

from .settings import (
    CarrierSettings,
    LoggingSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "CarrierSettings",
    "LoggingSettings",
    "clear_settings_cache",
    "get_settings",
]
