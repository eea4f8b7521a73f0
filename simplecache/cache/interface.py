"""
simplecache — Cache Interface

Defines the standardized cache contract consumers program against.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any


class CacheInterface(ABC):
    """
    Abstract base class for the standardized cache contract.

    Implementations must behave identically regardless of the storage
    adapter underneath: a miss is never an error, TTLs of zero or less
    delete, and keys are validated before any write.
    """

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """
        Fetch a value from the cache.

        Args:
            key: Cache key
            default: Returned when the key does not exist

        Returns:
            Cached value, or `default` on a miss
        """

    @abstractmethod
    def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """
        Persist a value in the cache.

        Args:
            key: Cache key
            value: Value to store
            ttl: Time-to-live in seconds (None = adapter default, <= 0 = delete)

        Returns:
            True on success, False otherwise
        """

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove an item from the cache."""

    @abstractmethod
    def clear(self) -> bool:
        """
        Wipe the whole cache.

        Returns:
            False when the adapter cannot bulk-flush
        """

    @abstractmethod
    def get_multiple(self, keys: Iterable[str], default: Any = None) -> dict[str, Any]:
        """
        Fetch several values at once.

        Keys that are missing are mapped to `default` when one is given,
        and omitted from the result otherwise.
        """

    @abstractmethod
    def set_multiple(self, values: Mapping[str, Any], ttl: int | None = None) -> bool:
        """Persist a batch of key/value pairs with a shared TTL."""

    @abstractmethod
    def delete_multiple(self, keys: Iterable[str]) -> bool:
        """Remove a batch of keys; True only if every key was removed."""

    @abstractmethod
    def has(self, key: str) -> bool:
        """Check whether a key is present."""
