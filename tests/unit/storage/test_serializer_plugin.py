"""
simplecache — Serializer Plugin Tests

Encoding on writes, decoding on reads, symmetric ordering with other
interceptors, and per-adapter capability caching.
"""

from typing import Any

import pytest

from simplecache.errors import SerializationError
from simplecache.storage.capabilities import REQUIRED_DATATYPES
from simplecache.storage.events import HookEvent
from simplecache.storage.plugins.serializer import SerializerPlugin
from simplecache.storage.serializers import PickleSerializer


class TestSerializerPlugin:
    """Test suite for SerializerPlugin."""

    @pytest.fixture
    def plugin(self) -> SerializerPlugin:
        return SerializerPlugin("json")

    @pytest.fixture
    def adapter(self, string_adapter: Any, plugin: SerializerPlugin) -> Any:
        string_adapter.add_plugin(plugin)
        return string_adapter

    def raw(self, adapter: Any, key: str) -> Any:
        """Stored payload, bypassing the interceptor chain."""
        value, _ = adapter._internal_get_item(key)
        return value

    def test_set_item_encodes_and_get_item_decodes(self, adapter: Any) -> None:
        adapter.set_item("key", {"a": [1, 2]})

        assert self.raw(adapter, "key") == b'{"a":[1,2]}'
        assert adapter.get_item("key") == ({"a": [1, 2]}, True)

    def test_miss_is_not_decoded(self, adapter: Any) -> None:
        assert adapter.get_item("missing") == (None, False)

    def test_batch_encode_and_decode(self, adapter: Any) -> None:
        assert adapter.set_items({"a": 1, "b": [True]}) == []

        assert self.raw(adapter, "a") == b"1"
        assert self.raw(adapter, "b") == b"[true]"
        assert adapter.get_items(["a", "b", "c"]) == {"a": 1, "b": [True]}

    def test_add_and_replace_are_encoded(self, adapter: Any) -> None:
        assert adapter.add_item("key", {"v": 1}) is True
        assert adapter.replace_item("key", {"v": 2}) is True
        assert adapter.add_items({"other": [3]}) == []
        assert adapter.replace_items({"other": [4]}) == []

        assert self.raw(adapter, "key") == b'{"v":2}'
        assert self.raw(adapter, "other") == b"[4]"

    def test_check_and_set_encodes_token(self, adapter: Any) -> None:
        adapter.set_item("key", {"version": 1})

        assert adapter.check_and_set_item({"version": 0}, "key", {"version": 2}) is False
        assert adapter.check_and_set_item({"version": 1}, "key", {"version": 2}) is True
        assert adapter.get_item("key") == ({"version": 2}, True)

    def test_caller_mapping_is_not_mutated(self, adapter: Any) -> None:
        values = {"a": [1]}
        adapter.set_items(values)
        assert values == {"a": [1]}

    def test_undecodable_payload_raises(self, adapter: Any) -> None:
        adapter._internal_set_item("broken", b"{nope", 0)

        with pytest.raises(SerializationError):
            adapter.get_item("broken")

    def test_capabilities_report_all_types(self, adapter: Any) -> None:
        capabilities = adapter.get_capabilities()

        assert capabilities.supports_all(REQUIRED_DATATYPES) is True
        assert capabilities.adapter_id == adapter.adapter_id
        assert capabilities.base is not None
        assert capabilities.base.supports("dict") is False

    def test_capabilities_cached_per_adapter(self, string_adapter_class: Any, plugin: SerializerPlugin) -> None:
        first = string_adapter_class(namespace="one")
        second = string_adapter_class(namespace="two")
        first.add_plugin(plugin)
        second.add_plugin(plugin)

        caps_first = first.get_capabilities()
        assert first.get_capabilities() is caps_first

        caps_second = second.get_capabilities()
        assert caps_second is not caps_first
        assert second.get_capabilities() is caps_second
        assert set(plugin.cached_capabilities()) == {first.adapter_id, second.adapter_id}

    def test_close_forgets_capabilities(self, adapter: Any, plugin: SerializerPlugin) -> None:
        adapter.get_capabilities()
        assert adapter.adapter_id in plugin.cached_capabilities()

        adapter.close()
        assert adapter.adapter_id not in plugin.cached_capabilities()

    def test_listener_handles_keyed_by_adapter_id(self, string_adapter_class: Any, plugin: SerializerPlugin) -> None:
        first = string_adapter_class(namespace="one")
        second = string_adapter_class(namespace="two")
        first.add_plugin(plugin)
        second.add_plugin(plugin)

        assert first.events.owner_id == first.adapter_id
        assert set(plugin._handles) == {first.adapter_id, second.adapter_id}

        first.remove_plugin(plugin)
        assert first.events.has_listeners("set_item.pre") is False
        assert second.events.has_listeners("set_item.pre") is True

        second.close()
        assert plugin._handles == {}

    def test_remove_plugin(self, adapter: Any, plugin: SerializerPlugin) -> None:
        adapter.get_capabilities()
        adapter.remove_plugin(plugin)

        assert adapter.has_plugin(plugin) is False
        assert plugin.cached_capabilities() == {}
        assert adapter.get_capabilities().supports("dict") is False

        adapter.set_item("key", "plain")
        assert self.raw(adapter, "key") == "plain"

    def test_duplicate_registration_rejected(self, adapter: Any, plugin: SerializerPlugin) -> None:
        from simplecache.errors import StorageInvalidArgumentError

        with pytest.raises(StorageInvalidArgumentError):
            adapter.add_plugin(plugin)

    def test_custom_serializer_instance(self, string_adapter: Any) -> None:
        string_adapter.add_plugin(SerializerPlugin(PickleSerializer()))

        string_adapter.set_item("key", (1, "two"))
        assert string_adapter.get_item("key") == ((1, "two"), True)

    def test_symmetric_ordering_with_other_interceptors(self, string_adapter: Any) -> None:
        """An interceptor outside the serializer sees plain values both ways."""
        seen: list[tuple[str, Any]] = []

        def outer_pre(event: HookEvent) -> None:
            seen.append(("pre", event.params["value"]))

        def outer_post(event: HookEvent) -> None:
            seen.append(("post", event.result))

        string_adapter.add_plugin(SerializerPlugin("json"), priority=10)
        # Higher priority than the serializer on the way in, lower on the way out
        string_adapter.events.attach("set_item.pre", outer_pre, priority=20)
        string_adapter.events.attach("get_item.post", outer_post, priority=-20)

        string_adapter.set_item("key", {"a": 1})
        string_adapter.get_item("key")

        assert seen == [("pre", {"a": 1}), ("post", {"a": 1})]

    def test_inner_interceptor_sees_encoded_values(self, string_adapter: Any) -> None:
        seen: list[tuple[str, Any]] = []
        string_adapter.add_plugin(SerializerPlugin("json"), priority=10)
        string_adapter.events.attach("set_item.pre", lambda e: seen.append(("pre", e.params["value"])), priority=1)
        string_adapter.events.attach("get_item.post", lambda e: seen.append(("post", e.result)), priority=-1)

        string_adapter.set_item("key", {"a": 1})
        string_adapter.get_item("key")

        assert seen == [("pre", b'{"a":1}'), ("post", b'{"a":1}')]
