"""
Shared pytest configuration for the flexdto test-suite.

Every test starts from a clean environment: no ``FLEXDTO_*`` variables, no
process-wide strict flag, fresh settings and default structlog config.
"""

import logging

import pytest
import structlog
from structlog.testing import capture_logs

from flexdto.config import clear_settings_cache, set_strict_default

ENV_VARS = (
    "FLEXDTO_ENVIRONMENT",
    "ENVIRONMENT",
    "FLEXDTO_STRICT",
    "FLEXDTO_LOG_LEVEL",
    "FLEXDTO_LOG_FORMAT",
    "FLEXDTO_MAX_VALUE_LENGTH",
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Clear ambient configuration before and after each test."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    set_strict_default(None)
    clear_settings_cache()
    yield
    for handler in root.handlers[:]:
        if handler not in handlers and type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    set_strict_default(None)
    clear_settings_cache()
    structlog.reset_defaults()


@pytest.fixture
def development_env(monkeypatch):
    """Pretend to run in a development environment."""
    monkeypatch.setenv("FLEXDTO_ENVIRONMENT", "development")
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def captured_logs():
    """Structured log entries emitted during the test."""
    with capture_logs() as logs:
        yield logs

