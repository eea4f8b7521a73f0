"""
simplecache — Logging Setup Tests
"""

import logging
from typing import Any

import pytest

from simplecache.config import LogLevel, SimpleCacheConfig
from simplecache.logging_setup import LOG_FORMAT, configure_logging


@pytest.fixture
def basic_config_calls(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, Any]]:
    calls: list[dict[str, Any]] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    return calls


@pytest.mark.parametrize(
    ("level", "expected"),
    [
        (None, logging.INFO),
        ("debug", logging.DEBUG),
        (LogLevel.WARNING, logging.WARNING),
        (SimpleCacheConfig(log_level=LogLevel.ERROR), logging.ERROR),
        ("not-a-level", logging.INFO),
    ],
)
def test_configure_logging_levels(basic_config_calls: list[dict[str, Any]], level: Any, expected: int) -> None:
    configure_logging(level)

    assert basic_config_calls == [{"level": expected, "format": LOG_FORMAT}]


def test_configure_logging_from_package_root(basic_config_calls: list[dict[str, Any]]) -> None:
    import simplecache

    simplecache.configure_logging(SimpleCacheConfig(log_level=LogLevel.DEBUG))

    assert basic_config_calls == [{"level": logging.DEBUG, "format": LOG_FORMAT}]
