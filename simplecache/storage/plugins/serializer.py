"""
simplecache — Serializer Plugin

Encodes values before they reach the adapter and decodes them after they
are read back, so adapters limited to strings can hold any value the
configured serializer understands.

Because encoding lifts the adapter's value type restrictions, the plugin
also rewrites the adapter's capability descriptor to report every value
type as supported. The rewritten descriptor is built once per adapter and
reused for every later query.
"""

from __future__ import annotations

import logging
from typing import Any

from ..capabilities import ALL_DATATYPES, Capabilities
from ..events import HookEvent, InterceptorChain, ListenerHandle
from ..serializers import Serializer, get_serializer

logger = logging.getLogger(__name__)

SINGLE_WRITE_EVENTS = ("set_item.pre", "add_item.pre", "replace_item.pre", "check_and_set_item.pre")
BATCH_WRITE_EVENTS = ("set_items.pre", "add_items.pre", "replace_items.pre")


class SerializerPlugin:
    """
    Interceptor that serializes values around adapter reads and writes.

    Usage:
        adapter = RedisAdapter(redis_url="redis://localhost:6379/0")
        adapter.add_plugin(SerializerPlugin("json"), priority=10)
    """

    def __init__(self, serializer: str | Serializer = "json") -> None:
        self.serializer = get_serializer(serializer)
        self._handles: dict[str, list[ListenerHandle]] = {}
        self._capabilities: dict[str, Capabilities] = {}

    def attach(self, events: InterceptorChain, priority: int = 1) -> None:
        """
        Register listeners on an adapter's interceptor chain.

        The higher the priority the sooner the plugin runs on pre events,
        and the later it runs on post events.
        """
        pre_priority = priority
        post_priority = -priority

        handles = [
            # read
            events.attach("get_item.post", self.on_read_item_post, post_priority),
            events.attach("get_items.post", self.on_read_items_post, post_priority),
            # overwrite capabilities
            events.attach("get_capabilities.post", self.on_get_capabilities_post, post_priority),
        ]
        # write
        handles.extend(events.attach(name, self.on_write_item_pre, pre_priority) for name in SINGLE_WRITE_EVENTS)
        handles.extend(events.attach(name, self.on_write_items_pre, pre_priority) for name in BATCH_WRITE_EVENTS)

        self._handles.setdefault(events.owner_id, []).extend(handles)

    def detach(self, events: InterceptorChain) -> None:
        for handle in self._handles.pop(events.owner_id, []):
            events.detach(handle)

    def forget(self, adapter_id: str) -> None:
        """Drop the cached capability descriptor and listener handles of a discarded adapter."""
        self._capabilities.pop(adapter_id, None)
        self._handles.pop(adapter_id, None)

    # ------------ Listeners ------------

    def on_read_item_post(self, event: HookEvent) -> None:
        if event.result is not None:
            event.result = self.serializer.unserialize(event.result)

    def on_read_items_post(self, event: HookEvent) -> None:
        result = event.result or {}
        event.result = {key: self.serializer.unserialize(value) for key, value in result.items()}

    def on_write_item_pre(self, event: HookEvent) -> None:
        params = event.params
        params["value"] = self.serializer.serialize(params["value"])
        # Set by check_and_set_item(); compared against the stored, encoded value
        if params.get("token") is not None:
            params["token"] = self.serializer.serialize(params["token"])

    def on_write_items_pre(self, event: HookEvent) -> None:
        pairs = event.params["key_value_pairs"]
        for key, value in pairs.items():
            pairs[key] = self.serializer.serialize(value)

    def on_get_capabilities_post(self, event: HookEvent) -> None:
        base: Capabilities = event.result
        index = base.adapter_id

        if index not in self._capabilities:
            self._capabilities[index] = base.derive(supported_datatypes=ALL_DATATYPES)
            logger.debug(
                "Augmented capabilities for adapter %s with %s serializer",
                index,
                self.serializer.name,
                extra={"adapter_id": index, "serializer": self.serializer.name},
            )

        event.result = self._capabilities[index]

    def cached_capabilities(self) -> dict[str, Any]:
        """Snapshot of augmented descriptors keyed by adapter id."""
        return dict(self._capabilities)
