"""
simplecache — Cache Module

The standardized cache contract and the facade that implements it on top
of any storage adapter.

Usage:
    from simplecache.cache import create_cache, get_cache

    cache = create_cache()
    cache.set("key", "value", ttl=3600)
    value = cache.get("key")
"""

from .decorator import INVALID_KEY_CHARS, MAX_KEY_LENGTH, SimpleCacheDecorator
from .factory import (
    close_all_caches,
    create_adapter,
    create_cache,
    get_cache,
    list_cache_instances,
    reset_cache_factory,
)
from .interface import CacheInterface

__all__ = [
    # Factory functions
    "create_cache",
    "create_adapter",
    "get_cache",
    "close_all_caches",
    "list_cache_instances",
    "reset_cache_factory",
    # Contract and facade
    "CacheInterface",
    "SimpleCacheDecorator",
    "INVALID_KEY_CHARS",
    "MAX_KEY_LENGTH",
]
