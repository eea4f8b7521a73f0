"""
simplecache — Memory Storage Adapter

In-memory adapter with LRU eviction and TTL support.
Thread-safe and suitable for single-process deployments.
"""

import logging
import threading
import time
from collections import OrderedDict
from typing import Any

from ..adapter import AbstractAdapter, FlushableInterface
from ..capabilities import ALL_DATATYPES, Capabilities
from ..options import MemoryAdapterOptions

logger = logging.getLogger(__name__)


class MemoryAdapter(AbstractAdapter, FlushableInterface):
    """
    In-memory storage adapter with LRU eviction.

    Features:
    - LRU eviction when max_size is reached
    - Per-entry TTL support
    - Thread-safe operations
    - Stores values by reference, so every value type is supported natively
    """

    def __init__(self, options: MemoryAdapterOptions | None = None, **kwargs: Any):
        """
        Initialize memory adapter.

        Args:
            options: Adapter options; keyword arguments build one when omitted
            **kwargs: MemoryAdapterOptions fields (max_size, ttl, namespace, ...)
        """
        super().__init__(options or MemoryAdapterOptions(**kwargs))

        # Storage: namespaced key -> (value, expiry_time)
        self._cache: OrderedDict[str, tuple[Any, float | None]] = OrderedDict()

        # Stats
        self._hits = 0
        self._misses = 0
        self._sets = 0
        self._deletes = 0
        self._evictions = 0

        self._lock = threading.RLock()

    @property
    def options(self) -> MemoryAdapterOptions:
        return self._options  # type: ignore[return-value]

    def _make_key(self, key: str) -> str:
        """Create namespaced key."""
        return f"{self.options.namespace}:{key}"

    def _is_expired(self, expiry: float | None) -> bool:
        if expiry is None:
            return False
        return time.time() > expiry

    def _build_capabilities(self) -> Capabilities:
        return Capabilities(
            adapter_id=self.adapter_id,
            supported_datatypes=ALL_DATATYPES,
            static_ttl=True,
            min_ttl=0,
            max_key_length=-1,
            namespace_is_prefix=True,
        )

    def _internal_get_item(self, key: str) -> tuple[Any, bool]:
        with self._lock:
            cache_key = self._make_key(key)

            if cache_key not in self._cache:
                self._misses += 1
                return None, False

            value, expiry = self._cache[cache_key]

            if self._is_expired(expiry):
                del self._cache[cache_key]
                self._misses += 1
                return None, False

            # Mark as recently used
            self._cache.move_to_end(cache_key)
            self._hits += 1
            return value, True

    def _internal_has_item(self, key: str) -> bool:
        with self._lock:
            cache_key = self._make_key(key)

            if cache_key not in self._cache:
                return False

            _, expiry = self._cache[cache_key]
            if self._is_expired(expiry):
                del self._cache[cache_key]
                return False

            return True

    def _internal_set_item(self, key: str, value: Any, ttl: int) -> bool:
        with self._lock:
            cache_key = self._make_key(key)
            expiry = time.time() + ttl if ttl > 0 else None

            # Evict if at capacity and key is new
            if cache_key not in self._cache and len(self._cache) >= self.options.max_size:
                evicted_key, _ = self._cache.popitem(last=False)
                self._evictions += 1
                logger.debug("Evicted key from memory adapter: %s", evicted_key)

            self._cache[cache_key] = (value, expiry)
            self._cache.move_to_end(cache_key)
            self._sets += 1
            return True

    def _internal_remove_item(self, key: str) -> bool:
        with self._lock:
            cache_key = self._make_key(key)

            if cache_key in self._cache:
                del self._cache[cache_key]
                self._deletes += 1
                return True

            return False

    def _internal_check_and_set_item(self, token: Any, key: str, value: Any, ttl: int) -> bool:
        with self._lock:
            return super()._internal_check_and_set_item(token, key, value, ttl)

    def flush(self) -> bool:
        """Remove every entry in this adapter's namespace."""
        with self._lock:
            prefix = f"{self.options.namespace}:"
            doomed = [k for k in self._cache if k.startswith(prefix)]
            for cache_key in doomed:
                del self._cache[cache_key]
            self._deletes += len(doomed)
            logger.info(
                "Flushed %d entries from memory adapter namespace '%s'",
                len(doomed),
                self.options.namespace,
            )
            return True

    def get_stats(self) -> dict[str, Any]:
        """Get adapter statistics."""
        with self._lock:
            total_requests = self._hits + self._misses
            hit_rate = (self._hits / total_requests * 100) if total_requests > 0 else 0.0

            return {
                "adapter": "memory",
                "size": len(self._cache),
                "max_size": self.options.max_size,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(hit_rate, 2),
                "sets": self._sets,
                "deletes": self._deletes,
                "evictions": self._evictions,
                "namespace": self.options.namespace,
            }
