"""Shared fixtures: isolate settings and logging configuration per test."""

from collections.abc import Iterator

import pytest

from carrier.foundation.config import clear_settings_cache
from carrier.runtime.logging import configure_logging, reset_logging


@pytest.fixture(autouse=True)
def quiet_logging() -> Iterator[None]:
    """Silence log output and drop cached settings around each test."""
    clear_settings_cache()
    configure_logging(format="none")
    yield
    reset_logging()
    clear_settings_cache()
