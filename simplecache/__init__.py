"""
simplecache — Standardized cache contract over pluggable storage adapters

Wraps any key/value storage adapter behind a fixed get/set/delete/batch
contract with key validation, TTL-as-deletion semantics, value
serialization and a two-kind error taxonomy.
"""

__version__ = "1.0.0"

from .cache import CacheInterface, SimpleCacheDecorator, create_cache, get_cache
from .errors import CacheError, CacheOperationError, InvalidArgumentError
from .logging_setup import configure_logging
from .storage import MemoryAdapter, SerializerPlugin

__all__ = [
    "CacheInterface",
    "SimpleCacheDecorator",
    "create_cache",
    "get_cache",
    "configure_logging",
    "CacheError",
    "CacheOperationError",
    "InvalidArgumentError",
    "MemoryAdapter",
    "SerializerPlugin",
    "__version__",
]
