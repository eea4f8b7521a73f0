"""
simplecache — Storage Module

The adapter contract wrapped by the cache facade, plus bundled adapters,
serializers and plugins.

Usage:
    from simplecache.storage import MemoryAdapter, SerializerPlugin

    adapter = MemoryAdapter(namespace="app", ttl=300)
    adapter.add_plugin(SerializerPlugin("json"))
"""

from .adapter import AbstractAdapter, FlushableInterface, StorageInterface, StoragePlugin
from .adapters import MemoryAdapter
from .capabilities import ALL_DATATYPES, REQUIRED_DATATYPES, STRING_DATATYPES, Capabilities
from .events import HookEvent, InterceptorChain, ListenerHandle
from .options import AdapterOptions, MemoryAdapterOptions, RedisAdapterOptions
from .plugins import SerializerPlugin
from .serializers import JsonSerializer, PickleSerializer, Serializer, get_serializer

__all__ = [
    # Contract
    "StorageInterface",
    "FlushableInterface",
    "StoragePlugin",
    "AbstractAdapter",
    # Adapters
    "MemoryAdapter",
    # Capabilities
    "Capabilities",
    "ALL_DATATYPES",
    "REQUIRED_DATATYPES",
    "STRING_DATATYPES",
    # Events
    "HookEvent",
    "InterceptorChain",
    "ListenerHandle",
    # Options
    "AdapterOptions",
    "MemoryAdapterOptions",
    "RedisAdapterOptions",
    # Plugins and serializers
    "SerializerPlugin",
    "Serializer",
    "JsonSerializer",
    "PickleSerializer",
    "get_serializer",
]
