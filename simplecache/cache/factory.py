"""
simplecache — Cache Factory

Canonical factory for creating cache facades from configuration.

Key points:
- Adapter selected with CACHE_ADAPTER=memory|redis (redis when REDIS_URL is set)
- The serializer plugin is attached when CACHE_SERIALIZER_PLUGIN=true;
  otherwise the facade serializes for adapters that need it
- All configuration is typed and validated via Pydantic models

Examples:
    from simplecache.cache.factory import create_cache, get_cache

    # Uses env-configured adapter (memory by default)
    cache = create_cache()

    # Or explicitly supply a config (e.g., for tests)
    from simplecache.config import AdapterBackend, SimpleCacheConfig, StorageConfig
    cfg = SimpleCacheConfig(storage=StorageConfig(adapter=AdapterBackend.MEMORY, ttl_seconds=600))
    mem_cache = create_cache(cfg, name="test")
"""

from __future__ import annotations

import logging

from ..config import AdapterBackend, SimpleCacheConfig, StorageConfig, get_config
from ..errors import ConfigurationError
from ..storage.adapter import AbstractAdapter
from ..storage.adapters.memory import MemoryAdapter
from ..storage.options import MemoryAdapterOptions
from ..storage.plugins.serializer import SerializerPlugin
from .decorator import SimpleCacheDecorator

logger = logging.getLogger(__name__)

# Global cache instances registry
_cache_instances: dict[str, SimpleCacheDecorator] = {}


def _create_memory_adapter(config: StorageConfig) -> AbstractAdapter:
    """Internal helper to construct a memory adapter."""
    return MemoryAdapter(
        MemoryAdapterOptions(
            max_size=config.max_size,
            ttl=config.ttl_seconds,
            namespace=config.namespace,
        )
    )


def _create_redis_adapter(config: StorageConfig) -> AbstractAdapter:
    """Internal helper to construct a redis adapter with lazy import."""
    if not config.redis_url:
        raise ConfigurationError(
            "REDIS_URL must be set when CACHE_ADAPTER=redis",
            details={"env": "REDIS_URL", "adapter": "redis"},
        )

    # Lazy import to avoid hard dependency when the memory adapter is used
    try:
        from ..storage.adapters.redis import RedisAdapter
        from ..storage.options import RedisAdapterOptions
    except ImportError as e:
        logger.error(
            "Redis adapter selected but redis client is not installed",
            extra={"package": "redis>=5.0.0", "error": str(e)},
        )
        raise ConfigurationError(
            "Redis adapter selected but redis client is unavailable. Install with: pip install 'redis>=5.0.0'",
            details={"package": "redis>=5.0.0", "error": str(e), "adapter": "redis"},
        ) from e

    return RedisAdapter(
        RedisAdapterOptions(
            redis_url=config.redis_url,
            namespace=config.namespace,
            ttl=config.ttl_seconds,
            max_connections=config.redis_max_connections,
            socket_timeout=config.redis_socket_timeout,
        )
    )


def create_adapter(config: SimpleCacheConfig) -> AbstractAdapter:
    """
    Build the storage adapter described by the config, with plugins attached.

    Raises:
        ConfigurationError: If the adapter is unknown or cannot be built
    """
    storage = config.storage
    if storage.adapter == AdapterBackend.MEMORY:
        adapter = _create_memory_adapter(storage)
    elif storage.adapter == AdapterBackend.REDIS:
        adapter = _create_redis_adapter(storage)
    else:
        raise ConfigurationError(
            f"Unknown storage adapter: {storage.adapter}",
            details={"adapter": str(storage.adapter), "supported": [a.value for a in AdapterBackend]},
        )

    if config.serializer.plugin_enabled:
        adapter.add_plugin(SerializerPlugin(config.serializer.name), priority=config.serializer.priority)

    return adapter


def create_cache(
    config: SimpleCacheConfig | None = None,
    name: str = "default",
) -> SimpleCacheDecorator:
    """
    Create a cache facade based on configuration.

    Args:
        config: Configuration (uses global config if not provided)
        name: Instance name (for multiple caches)

    Returns:
        Configured cache facade

    Raises:
        ConfigurationError: If configuration is invalid or the adapter is unavailable
    """
    if name in _cache_instances:
        logger.debug("Returning existing cache instance: %s", name)
        return _cache_instances[name]

    if config is None:
        config = get_config()

    logger.info(
        "Creating cache instance '%s' with adapter: %s",
        name,
        config.storage.adapter,
        extra={"cache_name": name, "adapter": str(config.storage.adapter)},
    )

    try:
        adapter = create_adapter(config)
        cache = SimpleCacheDecorator(adapter, serializer=config.serializer.name)
    except ConfigurationError:
        raise
    except Exception as e:
        logger.error(
            "Unexpected error creating cache instance '%s': %s",
            name,
            e,
            extra={"cache_name": name, "adapter": str(config.storage.adapter), "error": str(e)},
            exc_info=True,
        )
        raise ConfigurationError(
            f"Failed to create cache instance '{name}': {e}",
            details={"cache_name": name, "adapter": str(config.storage.adapter), "error": str(e)},
        ) from e

    _cache_instances[name] = cache
    logger.info("Cache instance '%s' created successfully", name, extra={"cache_name": name})
    return cache


def get_cache(name: str = "default") -> SimpleCacheDecorator:
    """
    Get an existing cache instance by name, creating it from the global
    configuration if needed.
    """
    if name not in _cache_instances:
        logger.debug("Cache instance '%s' not found, creating new instance", name)
        return create_cache(name=name)

    return _cache_instances[name]


def close_all_caches() -> None:
    """Close every registered adapter and clear the registry."""
    if not _cache_instances:
        logger.debug("No cache instances to close")
        return

    logger.info("Closing %d cache instance(s)...", len(_cache_instances))

    for name, cache in list(_cache_instances.items()):
        storage = cache.storage
        close = getattr(storage, "close", None)
        if close is None:
            continue
        try:
            close()
            logger.info("Closed cache instance: %s", name)
        except Exception as e:
            logger.error(
                "Error closing cache instance '%s': %s",
                name,
                e,
                extra={"cache_name": name, "error": str(e)},
                exc_info=True,
            )

    _cache_instances.clear()
    logger.info("All cache instances closed")


def reset_cache_factory() -> None:
    """
    Clear all instance references without closing them.

    Warning: Only use this in testing contexts.
    """
    count = len(_cache_instances)
    _cache_instances.clear()
    logger.debug("Reset cache factory, cleared %d instance reference(s)", count)


def list_cache_instances() -> list[str]:
    """List all registered cache instance names."""
    return list(_cache_instances.keys())
