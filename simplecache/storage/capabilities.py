"""
simplecache — Adapter Capabilities

Immutable description of what a storage adapter can hold.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

# Value types the standardized cache contract must be able to round-trip.
REQUIRED_DATATYPES: tuple[str, ...] = ("none", "bool", "int", "float", "str", "list", "dict", "object")

ALL_DATATYPES: Mapping[str, bool] = MappingProxyType({name: True for name in REQUIRED_DATATYPES})

STRING_DATATYPES: Mapping[str, bool] = MappingProxyType(
    {name: name == "str" for name in REQUIRED_DATATYPES}
)


@dataclass(frozen=True, eq=False)
class Capabilities:
    """
    Capability descriptor for one adapter instance.

    Compared by identity: each adapter builds its descriptor once and hands
    out the same object on every query.

    Attributes:
        adapter_id: Stable identifier of the adapter being described
        supported_datatypes: Value type name -> natively supported
        static_ttl: TTL is fixed at write time
        min_ttl: Smallest TTL in seconds the adapter accepts (0 = indefinite allowed)
        max_key_length: Longest key the adapter accepts (-1 = unlimited)
        namespace_is_prefix: Namespace is implemented as a key prefix
        base: Descriptor this one was derived from, if any
    """

    adapter_id: str
    supported_datatypes: Mapping[str, bool] = field(default_factory=lambda: ALL_DATATYPES)
    static_ttl: bool = True
    min_ttl: int = 0
    max_key_length: int = -1
    namespace_is_prefix: bool = True
    base: Capabilities | None = None

    def supports(self, datatype: str) -> bool:
        return bool(self.supported_datatypes.get(datatype, False))

    def supports_all(self, datatypes: tuple[str, ...] = REQUIRED_DATATYPES) -> bool:
        return all(self.supports(name) for name in datatypes)

    def derive(self, **changes: Any) -> Capabilities:
        """Return a new descriptor for the same adapter, linked back to this one."""
        if "supported_datatypes" in changes:
            changes["supported_datatypes"] = MappingProxyType(dict(changes["supported_datatypes"]))
        return replace(self, base=self, **changes)
