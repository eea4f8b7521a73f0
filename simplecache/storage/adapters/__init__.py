"""
simplecache — Storage Adapters

Exports available storage adapter implementations.

The Redis adapter is lazy-loaded via cache/factory.py to avoid import overhead.
"""

from .memory import MemoryAdapter

__all__ = [
    "MemoryAdapter",
]
