"""Root conftest.py for the test suite.

Project-wide fixtures and pytest configuration.
"""

import os
from collections.abc import Callable, Generator
from typing import Any

import pytest
from loguru import logger

from api_skeleton.core.config import get_settings
from api_skeleton.core.context import RequestContext
from api_skeleton.core.error_context import _get_sensitive_fields
from api_skeleton.core.logging import _state

APP_ENV_PREFIXES = (
    "APP_",
    "API_",
    "ADMIN_",
    "ENVIRONMENT",
    "DEBUG",
    "BASE_PATH_PREFIX",
    "TLS_CONFIG__",
    "LOG_CONFIG__",
    "AUTH_CONFIG__",
    "PAGINATION_CONFIG__",
    "RESPONSE_VALIDATION_CONFIG__",
    "DATA_SOURCE_CONFIG__",
)


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that test individual components in isolation"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that test multiple components"
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove application environment variables so defaults apply."""
    for key in list(os.environ):
        if key.startswith(APP_ENV_PREFIXES):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture(autouse=True)
def clean_lru_cache() -> Generator[None]:
    """Clear cached settings before and after each test."""
    get_settings.cache_clear()
    _get_sensitive_fields.cache_clear()
    yield
    get_settings.cache_clear()
    _get_sensitive_fields.cache_clear()


@pytest.fixture(autouse=True)
def reset_logging_state() -> Generator[None]:
    """Drop Loguru sinks and keep logging marked as configured.

    App factories call setup_logging(); with the flag set they leave the
    sinks added by the tests alone.
    """
    logger.remove()
    _state.configured = True
    yield
    _state.configured = True
    logger.remove()


@pytest.fixture(autouse=True)
def clean_context() -> Generator[None]:
    """Clear the request context before and after each test."""
    RequestContext.clear()
    yield
    RequestContext.clear()


@pytest.fixture
def captured_logs() -> Generator[list[dict[str, Any]]]:
    """Collect Loguru records emitted during the test.

    Yields:
        list[dict[str, Any]]: Loguru record dicts, in emission order.
    """
    records: list[dict[str, Any]] = []
    handler_id = logger.add(
        lambda message: records.append(message.record), level="DEBUG"
    )
    yield records
    logger.remove(handler_id)


@pytest.fixture
def warnings_in(
    captured_logs: list[dict[str, Any]],
) -> Callable[[], list[str]]:
    """Return a helper listing captured WARNING messages."""

    def _warnings() -> list[str]:
        return [
            str(record["message"])
            for record in captured_logs
            if record["level"].name == "WARNING"
        ]

    return _warnings
