"""
simplecache — Facade Serialization Helpers

Decides whether the facade must serialize values for an adapter and
performs the encoding when it does.

Adapters signal a miss with an empty/None value, which a naive decoder
cannot tell apart from a stored `False`. The encoded form of `False` is
therefore computed once per facade and checked before decoding.
"""

import logging
from typing import Any

from ..errors import SerializationError
from ..storage.adapter import StorageInterface
from ..storage.capabilities import REQUIRED_DATATYPES
from ..storage.serializers import Serializer, get_serializer

logger = logging.getLogger(__name__)


def is_serialization_required(storage: StorageInterface) -> bool:
    """True if the adapter (with its plugins) cannot hold every value type natively."""
    capabilities = storage.get_capabilities()
    return not capabilities.supports_all(REQUIRED_DATATYPES)


def _as_bytes(data: Any) -> Any:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, bytearray):
        return bytes(data)
    return data


class ValueSerialization:
    """Encode/decode pair used by the facade when the adapter needs it."""

    def __init__(self, serializer: str | Serializer = "json") -> None:
        self.serializer = get_serializer(serializer)
        # Encoded False, computed once for this serializer instance
        self.serialized_false = _as_bytes(self.serializer.serialize(False))

    def serialize(self, value: Any) -> bytes:
        return self.serializer.serialize(value)

    def unserialize(self, data: Any) -> Any:
        """
        Decode a stored payload.

        Returns `False` when the payload is the encoded `False`. Otherwise
        decodes it; a payload that decodes to `False` by any other route, or
        that cannot be decoded at all, is reported as absent (`None`).
        """
        if _as_bytes(data) == self.serialized_false:
            return False

        try:
            value = self.serializer.unserialize(data)
        except SerializationError as e:
            logger.warning(
                "Discarding undecodable cache payload: %s",
                e,
                extra={"serializer": self.serializer.name, "error": str(e)},
            )
            return None

        if value is False:
            return None

        return value
