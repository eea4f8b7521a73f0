"""
simplecache — Simple Cache Decorator

Exposes any storage adapter through the standardized CacheInterface.

Responsibilities:
- Validate keys on write paths (reserved characters, 64 code point limit)
- Treat TTLs of zero or less as deletion
- Pass TTLs per call, leaving the adapter's options untouched
- Serialize values when the adapter cannot store every type natively
- Translate adapter failures into InvalidArgumentError / CacheOperationError

Usage:
    from simplecache.cache import SimpleCacheDecorator
    from simplecache.storage import MemoryAdapter

    cache = SimpleCacheDecorator(MemoryAdapter())
    cache.set("user.42", {"name": "Ada"}, ttl=300)
    cache.get("user.42")
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
from datetime import timedelta
from typing import Any

from ..errors import CacheError, InvalidArgumentError, translate_storage_error
from ..storage.adapter import FlushableInterface, StorageInterface
from ..storage.serializers import Serializer
from .interface import CacheInterface
from .serialization import ValueSerialization, is_serialization_required

logger = logging.getLogger(__name__)

# Characters reserved by the standardized cache contract
INVALID_KEY_CHARS = "@{}()/\\"

MAX_KEY_LENGTH = 64


@contextmanager
def _translated(operation: str, **context: Any) -> Iterator[None]:
    """Re-raise anything the adapter throws as a facade error."""
    try:
        yield
    except CacheError:
        raise
    except Exception as e:
        error = translate_storage_error(e)
        logger.debug(
            "%s failed, raising %s: %s",
            operation,
            type(error).__name__,
            e,
            extra={"operation": operation, **context},
        )
        raise error from e


class SimpleCacheDecorator(CacheInterface):
    """Decorate a storage adapter for use through the standardized cache contract."""

    def __init__(self, storage: StorageInterface, serializer: str | Serializer = "json") -> None:
        """
        Args:
            storage: Adapter to wrap
            serializer: Serializer used if the adapter cannot hold every value type
        """
        with _translated("get_capabilities"):
            required = is_serialization_required(storage)

        self._storage = storage
        self._serialization = ValueSerialization(serializer) if required else None

        logger.debug(
            "Wrapped %s (facade serialization %s)",
            type(storage).__name__,
            "on" if required else "off",
        )

    @property
    def storage(self) -> StorageInterface:
        return self._storage

    @property
    def serialize_values(self) -> bool:
        return self._serialization is not None

    # ------------ Contract ------------

    def get(self, key: str, default: Any = None) -> Any:
        with _translated("get", key=key):
            result, success = self._storage.get_item(key)

        if self._serialization is not None and success:
            result = self._serialization.unserialize(result)
            return default if result is None else result

        if not success or result is None:
            return default
        return result

    def set(self, key: str, value: Any, ttl: int | timedelta | None = None) -> bool:
        self._validate_key(key)

        normalized_ttl = self._normalize_ttl(ttl)
        if normalized_ttl is not None and normalized_ttl < 1:
            logger.debug("Non-positive TTL for '%s', deleting instead", key, extra={"key": key, "ttl": normalized_ttl})
            return self.delete(key)

        with _translated("set", key=key, ttl=normalized_ttl):
            if self._serialization is not None:
                value = self._serialization.serialize(value)
            return self._storage.set_item(key, value, ttl=normalized_ttl)

    def delete(self, key: str) -> bool:
        with _translated("delete", key=key):
            return self._storage.remove_item(key)

    def clear(self) -> bool:
        if not isinstance(self._storage, FlushableInterface):
            return False
        with _translated("clear"):
            return self._storage.flush()

    def get_multiple(self, keys: Iterable[str], default: Any = None) -> dict[str, Any]:
        keys = self._key_list(keys)
        with _translated("get_multiple", key_count=len(keys)):
            results = self._storage.get_items(keys)

        for key in keys:
            if results.get(key) is None and default is not None:
                results[key] = default
                continue

            if results.get(key) is not None and self._serialization is not None:
                value = self._serialization.unserialize(results[key])
                results[key] = default if value is None else value

        return results

    def set_multiple(self, values: Mapping[str, Any], ttl: int | timedelta | None = None) -> bool:
        if not isinstance(values, Mapping):
            raise InvalidArgumentError(
                f"Values must be a mapping, got {type(values).__name__}",
                details={"values_type": type(values).__name__},
            )

        for key in values:
            self._validate_key(key)

        normalized_ttl = self._normalize_ttl(ttl)
        if normalized_ttl is not None and normalized_ttl < 1:
            logger.debug("Non-positive TTL for %d keys, deleting instead", len(values))
            return self.delete_multiple(list(values))

        with _translated("set_multiple", key_count=len(values), ttl=normalized_ttl):
            if self._serialization is not None:
                pairs = {key: self._serialization.serialize(value) for key, value in values.items()}
            else:
                pairs = dict(values)
            failed = self._storage.set_items(pairs, ttl=normalized_ttl)

        return not failed

    def delete_multiple(self, keys: Iterable[str]) -> bool:
        keys = self._key_list(keys)
        with _translated("delete_multiple", key_count=len(keys)):
            failed = self._storage.remove_items(keys)
        return not failed

    def has(self, key: str) -> bool:
        with _translated("has", key=key):
            return self._storage.has_item(key)

    # ------------ Helpers ------------

    @staticmethod
    def _key_list(keys: Iterable[str]) -> list[str]:
        if isinstance(keys, (str, bytes)) or not isinstance(keys, Iterable):
            raise InvalidArgumentError(
                f"Keys must be an iterable of strings, got {type(keys).__name__}",
                details={"keys_type": type(keys).__name__},
            )
        return list(keys)

    @staticmethod
    def _normalize_ttl(ttl: int | timedelta | None) -> int | None:
        if ttl is None:
            return None
        if isinstance(ttl, timedelta):
            return int(ttl.total_seconds())
        try:
            return int(ttl)
        except (TypeError, ValueError, OverflowError) as e:
            raise InvalidArgumentError(
                f"Invalid TTL {ttl!r}; expected an integer number of seconds",
                details={"ttl": repr(ttl)},
            ) from e

    @staticmethod
    def _validate_key(key: Any) -> None:
        """
        Raises:
            InvalidArgumentError: if the key is not a string, contains a
                reserved character, or is longer than 64 code points
        """
        if not isinstance(key, str):
            raise InvalidArgumentError(
                f"Invalid key of type {type(key).__name__} provided; keys must be strings",
                details={"key_type": type(key).__name__},
            )

        if any(char in INVALID_KEY_CHARS for char in key):
            raise InvalidArgumentError(
                f'Invalid key "{key}" provided; cannot contain any of ({INVALID_KEY_CHARS})',
                details={"key": key},
            )

        if len(key) > MAX_KEY_LENGTH:
            raise InvalidArgumentError(
                f'Invalid key "{key}" provided; key is too long. Must be no more than {MAX_KEY_LENGTH} characters',
                details={"key": key, "length": len(key)},
            )
