"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from carrier.foundation.config import CarrierSettings, LoggingSettings, clear_settings_cache, get_settings


def test_defaults() -> None:
    settings = get_settings()
    assert settings.wrap_callback_errors is False
    assert settings.capture_tracebacks is False
    assert settings.trace_channel == "traces"
    assert settings.logging.format == "console"


def test_cached_until_cleared(monkeypatch: pytest.MonkeyPatch) -> None:
    first = get_settings()
    assert get_settings() is first

    monkeypatch.setenv("CARRIER_TRACE_CHANNEL", "audit")
    assert get_settings().trace_channel == "traces"
    clear_settings_cache()
    assert get_settings().trace_channel == "audit"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CARRIER_WRAP_CALLBACK_ERRORS", "1")
    monkeypatch.setenv("CARRIER_CAPTURE_TRACEBACKS", "true")
    monkeypatch.setenv("CARRIER_LOG_LEVEL", "debug")
    monkeypatch.setenv("CARRIER_LOG_FORMAT", "json")

    settings = CarrierSettings()
    assert settings.wrap_callback_errors is True
    assert settings.capture_tracebacks is True
    assert settings.logging.level == "DEBUG"
    assert settings.logging.format == "json"


def test_invalid_values_rejected() -> None:
    with pytest.raises(ValidationError):
        LoggingSettings(level="LOUD")
    with pytest.raises(ValidationError):
        CarrierSettings(trace_channel="")
