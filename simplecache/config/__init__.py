"""
simplecache — Configuration Module

Provides typed configuration loading and validation.
"""

from .loader import get_config, load_config, reload_config
from .schemas import (
    AdapterBackend,
    Environment,
    LogLevel,
    SerializerConfig,
    SerializerName,
    SimpleCacheConfig,
    StorageConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "get_config",
    "reload_config",
    # Main config
    "SimpleCacheConfig",
    # Enums
    "Environment",
    "AdapterBackend",
    "SerializerName",
    "LogLevel",
    # Config sections
    "StorageConfig",
    "SerializerConfig",
]
