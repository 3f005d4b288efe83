"""Shared fixtures: fresh settings and silent logging for every test."""

import pytest

from reasoned.foundation.config import clear_settings_cache
from reasoned.observability import configure_logging


@pytest.fixture(autouse=True)
def clean_environment() -> object:
    """Reset cached settings and silence logging around each test."""
    clear_settings_cache()
    configure_logging(format="none", level="INFO")
    yield
    clear_settings_cache()
