"""
simplecache — Storage Adapter Contract

Defines the interface every storage adapter exposes and the base class that
routes each public operation through the adapter's interceptor chain.

Adapters implement the `_internal_*` hooks; the public methods take care of
key normalization, readable/writable switches, TTL resolution, pre/post
events and wrapping unexpected backend failures in StorageError.
"""

from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Protocol

from ..errors import StorageError, StorageInvalidArgumentError
from .capabilities import Capabilities
from .events import HookEvent, InterceptorChain
from .options import AdapterOptions

logger = logging.getLogger(__name__)


class StoragePlugin(Protocol):
    """A component that attaches listeners to an adapter's interceptor chain."""

    def attach(self, events: InterceptorChain, priority: int = 1) -> None: ...

    def detach(self, events: InterceptorChain) -> None: ...

    def forget(self, adapter_id: str) -> None: ...


class StorageInterface(ABC):
    """Key/value storage contract consumed by the cache facade."""

    @property
    @abstractmethod
    def options(self) -> AdapterOptions: ...

    @abstractmethod
    def get_item(self, key: str) -> tuple[Any, bool]:
        """Return `(value, success)`; `success` is False on a miss."""

    @abstractmethod
    def get_items(self, keys: Iterable[str]) -> dict[str, Any]:
        """Return a mapping containing only the keys that were found."""

    @abstractmethod
    def has_item(self, key: str) -> bool: ...

    @abstractmethod
    def has_items(self, keys: Iterable[str]) -> list[str]:
        """Return the keys that exist."""

    @abstractmethod
    def set_item(self, key: str, value: Any, ttl: int | None = None) -> bool: ...

    @abstractmethod
    def set_items(self, key_value_pairs: Mapping[str, Any], ttl: int | None = None) -> list[str]:
        """Store a batch; return the keys that were not stored."""

    @abstractmethod
    def add_item(self, key: str, value: Any, ttl: int | None = None) -> bool: ...

    @abstractmethod
    def add_items(self, key_value_pairs: Mapping[str, Any], ttl: int | None = None) -> list[str]: ...

    @abstractmethod
    def replace_item(self, key: str, value: Any, ttl: int | None = None) -> bool: ...

    @abstractmethod
    def replace_items(self, key_value_pairs: Mapping[str, Any], ttl: int | None = None) -> list[str]: ...

    @abstractmethod
    def check_and_set_item(self, token: Any, key: str, value: Any, ttl: int | None = None) -> bool:
        """Write `value` only if the stored value still equals `token`."""

    @abstractmethod
    def remove_item(self, key: str) -> bool: ...

    @abstractmethod
    def remove_items(self, keys: Iterable[str]) -> list[str]:
        """Remove a batch; return the keys that were not removed."""

    @abstractmethod
    def get_capabilities(self) -> Capabilities: ...


class FlushableInterface(ABC):
    """Adapters that can remove every entry they own in one call."""

    @abstractmethod
    def flush(self) -> bool: ...


class AbstractAdapter(StorageInterface):
    """
    Base class for storage adapters.

    Subclasses implement `_internal_get_item`, `_internal_get_items`,
    `_internal_has_item`, `_internal_set_item`, `_internal_remove_item` and
    `_build_capabilities`. Batch, add, replace and check-and-set operations
    have generic implementations built on the single-item ones which
    adapters may override with native equivalents.
    """

    def __init__(self, options: AdapterOptions | None = None) -> None:
        self._options = options or AdapterOptions()
        self.adapter_id = uuid.uuid4().hex
        self._events = InterceptorChain(owner_id=self.adapter_id)
        self._plugins: list[StoragePlugin] = []
        self._capabilities: Capabilities | None = None

    @property
    def options(self) -> AdapterOptions:
        return self._options

    @property
    def events(self) -> InterceptorChain:
        return self._events

    # ------------ Plugins ------------

    def add_plugin(self, plugin: StoragePlugin, priority: int = 1) -> None:
        """Attach a plugin's listeners to this adapter."""
        if self.has_plugin(plugin):
            raise StorageInvalidArgumentError(
                "Plugin is already registered",
                details={"plugin": type(plugin).__name__, "adapter_id": self.adapter_id},
            )
        plugin.attach(self._events, priority)
        self._plugins.append(plugin)
        logger.debug(
            "Registered plugin %s on %s",
            type(plugin).__name__,
            type(self).__name__,
            extra={"adapter_id": self.adapter_id, "priority": priority},
        )

    def remove_plugin(self, plugin: StoragePlugin) -> None:
        """Detach a plugin and drop anything it cached for this adapter."""
        if not self.has_plugin(plugin):
            return
        plugin.detach(self._events)
        plugin.forget(self.adapter_id)
        self._plugins = [p for p in self._plugins if p is not plugin]

    def has_plugin(self, plugin: StoragePlugin) -> bool:
        return any(p is plugin for p in self._plugins)

    @property
    def plugins(self) -> list[StoragePlugin]:
        return list(self._plugins)

    def close(self) -> None:
        """Release resources and let plugins discard per-adapter state."""
        for plugin in self._plugins:
            plugin.forget(self.adapter_id)

    # ------------ Helpers ------------

    def _normalize_key(self, key: Any) -> str:
        if not isinstance(key, str):
            raise StorageInvalidArgumentError(
                f"Key must be a string, got {type(key).__name__}",
                details={"key_type": type(key).__name__},
            )
        if key == "":
            raise StorageInvalidArgumentError("An empty key isn't allowed")
        return key

    def _normalize_keys(self, keys: Iterable[Any]) -> list[str]:
        if isinstance(keys, (str, bytes)):
            raise StorageInvalidArgumentError("Keys must be an iterable of strings, not a single string")
        normalized: list[str] = []
        for key in keys:
            key = self._normalize_key(key)
            if key not in normalized:
                normalized.append(key)
        return normalized

    def _normalize_key_value_pairs(self, key_value_pairs: Mapping[str, Any]) -> dict[str, Any]:
        if not isinstance(key_value_pairs, Mapping):
            raise StorageInvalidArgumentError(
                f"Key/value pairs must be a mapping, got {type(key_value_pairs).__name__}"
            )
        return {self._normalize_key(k): v for k, v in key_value_pairs.items()}

    def _resolve_ttl(self, ttl: int | None) -> int:
        """Per-call TTL if given, otherwise the configured default."""
        if ttl is None:
            return self._options.ttl
        if isinstance(ttl, bool) or not isinstance(ttl, int):
            raise StorageInvalidArgumentError(
                f"TTL must be an integer, got {type(ttl).__name__}",
                details={"ttl": repr(ttl)},
            )
        if ttl < 0:
            raise StorageInvalidArgumentError("TTL can't be negative", details={"ttl": ttl})
        return ttl

    def _run(self, operation: str, params: dict[str, Any], internal: Callable[[dict[str, Any]], Any]) -> HookEvent:
        """Fire `<operation>.pre`, run the operation, fire `<operation>.post`."""
        pre = self._events.trigger(HookEvent(f"{operation}.pre", self, params))
        if pre.propagation_stopped:
            result = pre.result
        else:
            try:
                result = internal(pre.params)
            except StorageError:
                raise
            except Exception as e:
                logger.error(
                    "Storage operation %s failed in %s: %s",
                    operation,
                    type(self).__name__,
                    e,
                    extra={"operation": operation, "adapter_id": self.adapter_id, "error": str(e)},
                    exc_info=True,
                )
                raise StorageError(
                    f"{operation} failed: {e}",
                    details={"operation": operation, "adapter": type(self).__name__},
                ) from e

        return self._events.trigger(HookEvent(f"{operation}.post", self, pre.params, result))

    # ------------ Reads ------------

    def get_item(self, key: str) -> tuple[Any, bool]:
        if not self._options.readable:
            return None, False

        def op(params: dict[str, Any]) -> Any:
            value, success = self._internal_get_item(params["key"])
            params["success"] = success
            return value

        event = self._run("get_item", {"key": self._normalize_key(key), "success": False}, op)
        return event.result, bool(event.params.get("success"))

    def get_items(self, keys: Iterable[str]) -> dict[str, Any]:
        if not self._options.readable:
            return {}
        event = self._run(
            "get_items",
            {"keys": self._normalize_keys(keys)},
            lambda p: self._internal_get_items(p["keys"]),
        )
        return dict(event.result or {})

    def has_item(self, key: str) -> bool:
        if not self._options.readable:
            return False
        event = self._run("has_item", {"key": self._normalize_key(key)}, lambda p: self._internal_has_item(p["key"]))
        return bool(event.result)

    def has_items(self, keys: Iterable[str]) -> list[str]:
        if not self._options.readable:
            return []
        event = self._run(
            "has_items",
            {"keys": self._normalize_keys(keys)},
            lambda p: [k for k in p["keys"] if self._internal_has_item(k)],
        )
        return list(event.result or [])

    # ------------ Writes ------------

    def set_item(self, key: str, value: Any, ttl: int | None = None) -> bool:
        if not self._options.writable:
            return False
        event = self._run(
            "set_item",
            {"key": self._normalize_key(key), "value": value, "ttl": self._resolve_ttl(ttl)},
            lambda p: self._internal_set_item(p["key"], p["value"], p["ttl"]),
        )
        return bool(event.result)

    def set_items(self, key_value_pairs: Mapping[str, Any], ttl: int | None = None) -> list[str]:
        pairs = self._normalize_key_value_pairs(key_value_pairs)
        if not self._options.writable:
            return list(pairs)
        event = self._run(
            "set_items",
            {"key_value_pairs": pairs, "ttl": self._resolve_ttl(ttl)},
            lambda p: self._internal_set_items(p["key_value_pairs"], p["ttl"]),
        )
        return list(event.result or [])

    def add_item(self, key: str, value: Any, ttl: int | None = None) -> bool:
        if not self._options.writable:
            return False
        event = self._run(
            "add_item",
            {"key": self._normalize_key(key), "value": value, "ttl": self._resolve_ttl(ttl)},
            lambda p: self._internal_add_item(p["key"], p["value"], p["ttl"]),
        )
        return bool(event.result)

    def add_items(self, key_value_pairs: Mapping[str, Any], ttl: int | None = None) -> list[str]:
        pairs = self._normalize_key_value_pairs(key_value_pairs)
        if not self._options.writable:
            return list(pairs)
        event = self._run(
            "add_items",
            {"key_value_pairs": pairs, "ttl": self._resolve_ttl(ttl)},
            lambda p: [k for k, v in p["key_value_pairs"].items() if not self._internal_add_item(k, v, p["ttl"])],
        )
        return list(event.result or [])

    def replace_item(self, key: str, value: Any, ttl: int | None = None) -> bool:
        if not self._options.writable:
            return False
        event = self._run(
            "replace_item",
            {"key": self._normalize_key(key), "value": value, "ttl": self._resolve_ttl(ttl)},
            lambda p: self._internal_replace_item(p["key"], p["value"], p["ttl"]),
        )
        return bool(event.result)

    def replace_items(self, key_value_pairs: Mapping[str, Any], ttl: int | None = None) -> list[str]:
        pairs = self._normalize_key_value_pairs(key_value_pairs)
        if not self._options.writable:
            return list(pairs)
        event = self._run(
            "replace_items",
            {"key_value_pairs": pairs, "ttl": self._resolve_ttl(ttl)},
            lambda p: [
                k for k, v in p["key_value_pairs"].items() if not self._internal_replace_item(k, v, p["ttl"])
            ],
        )
        return list(event.result or [])

    def check_and_set_item(self, token: Any, key: str, value: Any, ttl: int | None = None) -> bool:
        if not self._options.writable:
            return False
        event = self._run(
            "check_and_set_item",
            {"token": token, "key": self._normalize_key(key), "value": value, "ttl": self._resolve_ttl(ttl)},
            lambda p: self._internal_check_and_set_item(p["token"], p["key"], p["value"], p["ttl"]),
        )
        return bool(event.result)

    def remove_item(self, key: str) -> bool:
        if not self._options.writable:
            return False
        event = self._run("remove_item", {"key": self._normalize_key(key)}, lambda p: self._internal_remove_item(p["key"]))
        return bool(event.result)

    def remove_items(self, keys: Iterable[str]) -> list[str]:
        normalized = self._normalize_keys(keys)
        if not self._options.writable:
            return normalized
        event = self._run("remove_items", {"keys": normalized}, lambda p: self._internal_remove_items(p["keys"]))
        return list(event.result or [])

    # ------------ Capabilities ------------

    def get_capabilities(self) -> Capabilities:
        if self._capabilities is None:
            self._capabilities = self._build_capabilities()
        event = self._run("get_capabilities", {}, lambda p: self._capabilities)
        return event.result

    # ------------ Adapter hooks ------------

    @abstractmethod
    def _build_capabilities(self) -> Capabilities: ...

    @abstractmethod
    def _internal_get_item(self, key: str) -> tuple[Any, bool]: ...

    @abstractmethod
    def _internal_has_item(self, key: str) -> bool: ...

    @abstractmethod
    def _internal_set_item(self, key: str, value: Any, ttl: int) -> bool: ...

    @abstractmethod
    def _internal_remove_item(self, key: str) -> bool: ...

    def _internal_get_items(self, keys: list[str]) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key in keys:
            value, success = self._internal_get_item(key)
            if success:
                result[key] = value
        return result

    def _internal_set_items(self, key_value_pairs: dict[str, Any], ttl: int) -> list[str]:
        return [k for k, v in key_value_pairs.items() if not self._internal_set_item(k, v, ttl)]

    def _internal_add_item(self, key: str, value: Any, ttl: int) -> bool:
        if self._internal_has_item(key):
            return False
        return self._internal_set_item(key, value, ttl)

    def _internal_replace_item(self, key: str, value: Any, ttl: int) -> bool:
        if not self._internal_has_item(key):
            return False
        return self._internal_set_item(key, value, ttl)

    def _internal_check_and_set_item(self, token: Any, key: str, value: Any, ttl: int) -> bool:
        current, success = self._internal_get_item(key)
        if not success or current != token:
            return False
        return self._internal_set_item(key, value, ttl)

    def _internal_remove_items(self, keys: list[str]) -> list[str]:
        return [k for k in keys if not self._internal_remove_item(k)]
