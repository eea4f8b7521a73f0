"""
simplecache — Value Serializers

Serializers turn arbitrary values into bytes for adapters that can only
store strings, and back again.
"""

import json
import logging
import pickle
from typing import Any, Protocol, runtime_checkable

from ..errors import ConfigurationError, SerializationError

logger = logging.getLogger(__name__)


@runtime_checkable
class Serializer(Protocol):
    """Contract for serializing/deserializing cached values."""

    name: str

    def serialize(self, value: Any) -> bytes:
        """
        Serialize value to bytes.

        Raises:
            SerializationError: If the value cannot be serialized.
        """
        ...

    def unserialize(self, data: bytes | str) -> Any:
        """
        Deserialize bytes to a value.

        Raises:
            SerializationError: If the data cannot be deserialized.
        """
        ...


class JsonSerializer:
    """UTF-8 JSON with compact separators."""

    name = "json"

    def serialize(self, value: Any) -> bytes:
        try:
            return json.dumps(value, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SerializationError(
                self.name,
                f"Cannot serialize value of type {type(value).__name__}: {e}",
                details={"value_type": type(value).__name__},
            ) from e

    def unserialize(self, data: bytes | str) -> Any:
        if isinstance(data, (bytes, bytearray)):
            try:
                data = bytes(data).decode("utf-8")
            except UnicodeDecodeError as e:
                raise SerializationError(self.name, f"Payload is not valid UTF-8: {e}") from e
        if not isinstance(data, str):
            raise SerializationError(self.name, f"Cannot unserialize payload of type {type(data).__name__}")
        try:
            return json.loads(data)
        except ValueError as e:
            raise SerializationError(
                self.name,
                f"Invalid JSON payload: {e}",
                details={"data_preview": data[:100]},
            ) from e


class PickleSerializer:
    """Python pickle using the highest available protocol."""

    name = "pickle"

    def serialize(self, value: Any) -> bytes:
        try:
            return pickle.dumps(value, protocol=pickle.HIGHEST_PROTOCOL)
        except (pickle.PicklingError, TypeError, AttributeError) as e:
            raise SerializationError(
                self.name,
                f"Cannot pickle value of type {type(value).__name__}: {e}",
                details={"value_type": type(value).__name__},
            ) from e

    def unserialize(self, data: bytes | str) -> Any:
        if isinstance(data, str):
            data = data.encode("latin-1")
        if not isinstance(data, (bytes, bytearray)):
            raise SerializationError(self.name, f"Cannot unpickle payload of type {type(data).__name__}")
        try:
            return pickle.loads(data)
        except (pickle.UnpicklingError, EOFError, ValueError, TypeError, AttributeError, ImportError, IndexError) as e:
            raise SerializationError(self.name, f"Invalid pickle payload: {e}") from e


_SERIALIZERS: dict[str, type] = {
    JsonSerializer.name: JsonSerializer,
    PickleSerializer.name: PickleSerializer,
}


def get_serializer(serializer: "str | Serializer") -> Serializer:
    """
    Resolve a serializer by registered name, or pass an instance through.

    Raises:
        ConfigurationError: If the name is not registered
    """
    if isinstance(serializer, Serializer):
        return serializer

    # str-based enums hash by member name, so use the raw value for lookups
    name = str(getattr(serializer, "value", serializer)).lower()
    try:
        return _SERIALIZERS[name]()
    except KeyError:
        raise ConfigurationError(
            f"Unknown serializer: {name}",
            details={"serializer": name, "supported": sorted(_SERIALIZERS)},
        ) from None
