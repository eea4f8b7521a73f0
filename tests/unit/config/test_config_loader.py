"""
simplecache — Configuration Tests

Environment/.env loading, validation and the config singleton.
"""

from pathlib import Path

import pytest

from simplecache.config import (
    AdapterBackend,
    SerializerName,
    SimpleCacheConfig,
    StorageConfig,
    get_config,
    load_config,
    reload_config,
)
from simplecache.errors import ConfigurationError


@pytest.mark.usefixtures("clean_env")
class TestLoadConfig:
    """Test suite for load_config()."""

    def test_defaults(self) -> None:
        config = load_config(reload=True)

        assert config.environment == "test"
        assert config.log_level == "DEBUG"
        assert config.storage.adapter == AdapterBackend.MEMORY
        assert config.storage.ttl_seconds == 0
        assert config.storage.namespace == "simplecache"
        assert config.serializer.name == SerializerName.JSON
        assert config.serializer.plugin_enabled is False

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CACHE_TTL_SECONDS", "120")
        monkeypatch.setenv("CACHE_MAX_SIZE", "5")
        monkeypatch.setenv("CACHE_NAMESPACE", "app")
        monkeypatch.setenv("CACHE_SERIALIZER", "pickle")
        monkeypatch.setenv("CACHE_SERIALIZER_PLUGIN", "true")
        monkeypatch.setenv("CACHE_SERIALIZER_PRIORITY", "7")

        config = load_config(reload=True)
        assert config.storage.ttl_seconds == 120
        assert config.storage.max_size == 5
        assert config.storage.namespace == "app"
        assert config.serializer.name == SerializerName.PICKLE
        assert config.serializer.plugin_enabled is True
        assert config.serializer.priority == 7

    def test_redis_auto_detected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REDIS_URL", "redis://localhost:6379/3")

        config = load_config(reload=True)
        assert config.storage.adapter == AdapterBackend.REDIS
        assert config.storage.redis_url == "redis://localhost:6379/3"

    def test_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        env_file = tmp_path / "custom.env"
        env_file.write_text("CACHE_NAMESPACE=from-file\nCACHE_TTL_SECONDS=30\n")
        # load_dotenv writes to os.environ; register the names so monkeypatch undoes it
        monkeypatch.setenv("CACHE_NAMESPACE", "overridden")
        monkeypatch.setenv("CACHE_TTL_SECONDS", "1")

        config = load_config(env_file=str(env_file), reload=True)
        assert config.storage.namespace == "from-file"
        assert config.storage.ttl_seconds == 30

    def test_invalid_values_raise_configuration_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CACHE_TTL_SECONDS", "-1")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(reload=True)
        assert exc_info.value.details["validation_errors"]

    def test_non_numeric_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CACHE_MAX_SIZE", "lots")

        with pytest.raises(ConfigurationError):
            load_config(reload=True)

    def test_redis_adapter_requires_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CACHE_ADAPTER", "redis")

        with pytest.raises(ConfigurationError):
            load_config(reload=True)

    def test_singleton(self) -> None:
        first = get_config()
        assert get_config() is first
        assert load_config() is first
        assert reload_config() is not first


class TestSchemas:
    """Direct schema validation."""

    def test_storage_config_rejects_redis_without_url(self) -> None:
        with pytest.raises(ValueError):
            StorageConfig(adapter=AdapterBackend.REDIS, redis_url=None)

    def test_root_defaults(self) -> None:
        config = SimpleCacheConfig()
        assert config.storage.adapter == AdapterBackend.MEMORY
        assert config.serializer.priority == 1
