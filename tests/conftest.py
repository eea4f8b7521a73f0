"""
simplecache — Test Configuration and Shared Fixtures

Provides pytest configuration and shared fixtures for unit and integration tests.
"""

import os
import socket
from collections.abc import Generator
from typing import Any

import pytest

from simplecache.errors import StorageInvalidArgumentError
from simplecache.storage.adapter import AbstractAdapter
from simplecache.storage.adapters.memory import MemoryAdapter
from simplecache.storage.capabilities import STRING_DATATYPES, Capabilities

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "DEBUG"


def is_redis_available() -> bool:
    """Check if Redis server is available for testing."""
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.settimeout(1)
        result = sock.connect_ex(("localhost", 6379))
        sock.close()
        return result == 0
    except Exception:
        return False


class StringOnlyMemoryAdapter(MemoryAdapter):
    """Memory adapter that advertises string-only storage, like Redis."""

    def _build_capabilities(self) -> Capabilities:
        return Capabilities(adapter_id=self.adapter_id, supported_datatypes=STRING_DATATYPES)


class DictAdapter(AbstractAdapter):
    """
    Minimal string-only adapter without flush support.

    `fail_with` makes every internal operation raise the given exception,
    for exercising error translation.
    """

    def __init__(self, **kwargs: Any) -> None:
        super().__init__()
        self.data: dict[str, Any] = {}
        self.fail_with: BaseException | None = None
        self.calls: list[tuple[str, Any]] = []

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def _build_capabilities(self) -> Capabilities:
        return Capabilities(adapter_id=self.adapter_id, supported_datatypes=STRING_DATATYPES)

    def _internal_get_item(self, key: str) -> tuple[Any, bool]:
        self._maybe_fail()
        if key not in self.data:
            return None, False
        return self.data[key], True

    def _internal_has_item(self, key: str) -> bool:
        self._maybe_fail()
        return key in self.data

    def _internal_set_item(self, key: str, value: Any, ttl: int) -> bool:
        self._maybe_fail()
        if not isinstance(value, (str, bytes)):
            raise StorageInvalidArgumentError(f"Cannot store {type(value).__name__}")
        self.calls.append(("set", (key, ttl)))
        self.data[key] = value
        return True

    def _internal_remove_item(self, key: str) -> bool:
        self._maybe_fail()
        return self.data.pop(key, None) is not None


@pytest.fixture
def test_redis_url() -> str:
    """Get Redis URL for testing (database 15 for isolation)."""
    return os.environ.get("TEST_REDIS_URL", "redis://localhost:6379/15")


@pytest.fixture
def memory_adapter() -> MemoryAdapter:
    """Memory adapter that stores every value type natively."""
    return MemoryAdapter(namespace="test", max_size=100)


@pytest.fixture
def string_adapter() -> StringOnlyMemoryAdapter:
    """Flushable memory adapter that forces facade-level serialization."""
    return StringOnlyMemoryAdapter(namespace="test", max_size=100)


@pytest.fixture
def dict_adapter() -> DictAdapter:
    """String-only adapter that cannot bulk-flush."""
    return DictAdapter()


@pytest.fixture
def sample_cache_data() -> dict[str, Any]:
    """Sample data for cache testing."""
    return {
        "simple_string": "hello",
        "simple_int": 42,
        "simple_float": 3.14,
        "simple_true": True,
        "simple_false": False,
        "empty_string": "",
        "zero": 0,
        "complex_dict": {
            "nested": {
                "key": "value",
                "number": 123,
                "list": [1, 2, 3],
            }
        },
        "complex_list": [
            {"id": 1, "name": "Alice"},
            {"id": 2, "name": "Bob"},
        ],
    }


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Any) -> None:
    """Remove cache-related environment variables and run from an empty directory."""
    for name in (
        "CACHE_ADAPTER",
        "CACHE_TTL_SECONDS",
        "CACHE_MAX_SIZE",
        "CACHE_NAMESPACE",
        "CACHE_SERIALIZER",
        "CACHE_SERIALIZER_PLUGIN",
        "CACHE_SERIALIZER_PRIORITY",
        "REDIS_URL",
        "REDIS_MAX_CONNECTIONS",
        "REDIS_SOCKET_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def reset_cache_factory() -> Generator[None, None, None]:
    """Reset cache factory and config singleton after each test to prevent state leakage."""
    yield
    from simplecache.cache.factory import reset_cache_factory
    from simplecache.config import loader

    reset_cache_factory()
    loader._config_instance = None


@pytest.fixture
def string_adapter_class() -> type[StringOnlyMemoryAdapter]:
    """The string-only adapter class, for tests that need several instances."""
    return StringOnlyMemoryAdapter
