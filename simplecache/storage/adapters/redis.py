"""
simplecache — Redis Storage Adapter

Synchronous Redis adapter with:
- Namespace prefixing for safe multi-tenant usage
- Per-key TTL via SET EX
- NX/XX writes for add/replace and WATCH-based check-and-set
- Batch operations using MGET and pipelines

Redis stores strings only, so this adapter reports `str` as its sole
supported value type. Pair it with the SerializerPlugin, or let the cache
facade serialize values itself.

Example:
    adapter = RedisAdapter(redis_url="redis://localhost:6379/0", namespace="app")
    adapter.set_item("greeting", b'{"msg":"hello"}', ttl=60)
    value, found = adapter.get_item("greeting")
"""

from __future__ import annotations

import logging
from typing import Any

from ...errors import StorageInvalidArgumentError
from ..adapter import AbstractAdapter, FlushableInterface
from ..capabilities import STRING_DATATYPES, Capabilities
from ..options import RedisAdapterOptions

logger = logging.getLogger(__name__)

try:
    from redis import Redis
    from redis.exceptions import WatchError
except ImportError as e:  # pragma: no cover
    raise ImportError(
        "Redis client is required but not installed. "
        "Install with: pip install 'redis>=5.0.0' or add 'redis' to your dependencies."
    ) from e


class RedisAdapter(AbstractAdapter, FlushableInterface):
    """
    Redis storage adapter.

    Notes:
    - Keys are prefixed with the configured namespace to avoid collisions.
    - Values must be str or bytes; they come back as bytes.
    - TTL 0 stores without expiry.
    """

    def __init__(
        self,
        options: RedisAdapterOptions | None = None,
        client: Redis | None = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize Redis adapter.

        Args:
            options: Adapter options; keyword arguments build one when omitted
            client: Pre-built Redis client (the URL in options is then unused)
            **kwargs: RedisAdapterOptions fields (redis_url, namespace, ttl, ...)
        """
        super().__init__(options or RedisAdapterOptions(**kwargs))

        # Lazy connection; connects on first command
        self._client: Redis = client or Redis.from_url(
            url=self.options.redis_url,
            decode_responses=False,
            max_connections=self.options.max_connections,
            socket_timeout=self.options.socket_timeout,
        )

    @property
    def options(self) -> RedisAdapterOptions:
        return self._options  # type: ignore[return-value]

    @property
    def client(self) -> Redis:
        return self._client

    # ------------ Helpers ------------

    def _make_key(self, key: str) -> str:
        """Create namespaced key."""
        return f"{self.options.namespace}:{key}"

    @staticmethod
    def _ex(ttl: int) -> int | None:
        return ttl if ttl > 0 else None

    def _check_value(self, key: str, value: Any) -> None:
        if not isinstance(value, (str, bytes, bytearray)):
            raise StorageInvalidArgumentError(
                f"Redis adapter can only store str or bytes values, got {type(value).__name__}",
                details={"key": key, "value_type": type(value).__name__},
            )

    def _build_capabilities(self) -> Capabilities:
        return Capabilities(
            adapter_id=self.adapter_id,
            supported_datatypes=STRING_DATATYPES,
            static_ttl=True,
            min_ttl=1,
            max_key_length=512 * 1024 * 1024 - len(self.options.namespace) - 1,
            namespace_is_prefix=True,
        )

    # ------------ Adapter hooks ------------

    def _internal_get_item(self, key: str) -> tuple[Any, bool]:
        data = self._client.get(self._make_key(key))
        if data is None:
            return None, False
        return data, True

    def _internal_get_items(self, keys: list[str]) -> dict[str, Any]:
        if not keys:
            return {}
        values = self._client.mget([self._make_key(k) for k in keys])
        # mget preserves order
        return {k: raw for k, raw in zip(keys, values, strict=False) if raw is not None}

    def _internal_has_item(self, key: str) -> bool:
        return bool(self._client.exists(self._make_key(key)))

    def _internal_set_item(self, key: str, value: Any, ttl: int) -> bool:
        self._check_value(key, value)
        # redis-py returns True on success
        return bool(self._client.set(self._make_key(key), value, ex=self._ex(ttl)))

    def _internal_set_items(self, key_value_pairs: dict[str, Any], ttl: int) -> list[str]:
        if not key_value_pairs:
            return []
        for key, value in key_value_pairs.items():
            self._check_value(key, value)

        pipe = self._client.pipeline(transaction=False)
        ex = self._ex(ttl)
        for key, value in key_value_pairs.items():
            pipe.set(self._make_key(key), value, ex=ex)
        results = pipe.execute()
        return [k for k, r in zip(key_value_pairs, results, strict=False) if not r]

    def _internal_add_item(self, key: str, value: Any, ttl: int) -> bool:
        self._check_value(key, value)
        return bool(self._client.set(self._make_key(key), value, ex=self._ex(ttl), nx=True))

    def _internal_replace_item(self, key: str, value: Any, ttl: int) -> bool:
        self._check_value(key, value)
        return bool(self._client.set(self._make_key(key), value, ex=self._ex(ttl), xx=True))

    def _internal_check_and_set_item(self, token: Any, key: str, value: Any, ttl: int) -> bool:
        self._check_value(key, value)
        if isinstance(token, str):
            token = token.encode("utf-8")
        ns_key = self._make_key(key)

        with self._client.pipeline() as pipe:
            try:
                pipe.watch(ns_key)
                current = pipe.get(ns_key)
                if current is None or current != token:
                    pipe.unwatch()
                    return False
                pipe.multi()
                pipe.set(ns_key, value, ex=self._ex(ttl))
                pipe.execute()
                return True
            except WatchError:
                logger.debug("check_and_set lost the race for key '%s'", key, extra={"key": key})
                return False

    def _internal_remove_item(self, key: str) -> bool:
        return bool(self._client.delete(self._make_key(key)))

    def _internal_remove_items(self, keys: list[str]) -> list[str]:
        if not keys:
            return []
        pipe = self._client.pipeline(transaction=False)
        for key in keys:
            pipe.delete(self._make_key(key))
        results = pipe.execute()
        return [k for k, deleted in zip(keys, results, strict=False) if not deleted]

    # ------------ Flush / lifecycle ------------

    def flush(self) -> bool:
        """
        Remove every entry under the namespace.

        Implementation: SCAN match "<namespace>:*" and DEL in batches.
        """
        pattern = f"{self.options.namespace}:*"
        cursor = 0
        total_deleted = 0
        batch_size = 1000

        while True:
            cursor, keys = self._client.scan(cursor=cursor, match=pattern, count=batch_size)
            if keys:
                total_deleted += self._client.delete(*keys)
            if cursor == 0:
                break

        logger.info("Flushed %d keys from namespace '%s'", total_deleted, self.options.namespace)
        return True

    def close(self) -> None:
        """Close the Redis client and release resources."""
        super().close()
        try:
            self._client.close()
            logger.info("Closed Redis adapter for namespace '%s'", self.options.namespace)
        finally:
            self._client.connection_pool.disconnect()
