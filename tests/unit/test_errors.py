"""
simplecache — Error Translation Tests
"""

from simplecache.errors import (
    CacheError,
    CacheOperationError,
    InvalidArgumentError,
    SerializationError,
    StorageError,
    StorageInvalidArgumentError,
    translate_storage_error,
)


class TestTranslateStorageError:
    """Test suite for translate_storage_error()."""

    def test_invalid_argument(self) -> None:
        original = StorageInvalidArgumentError("bad key", details={"key": ""})
        translated = translate_storage_error(original)

        assert type(translated) is InvalidArgumentError
        assert translated.original is original
        assert translated.message == "bad key"
        assert translated.details == {"original_error": "StorageInvalidArgumentError", "key": ""}

    def test_storage_error(self) -> None:
        original = StorageError("disk full")
        translated = translate_storage_error(original)

        assert type(translated) is CacheOperationError
        assert translated.original is original

    def test_serialization_error_is_operation_error(self) -> None:
        translated = translate_storage_error(SerializationError("json", "broken"))

        assert type(translated) is CacheOperationError
        assert translated.details["serializer"] == "json"

    def test_foreign_exception(self) -> None:
        original = ConnectionError("refused")
        translated = translate_storage_error(original)

        assert type(translated) is CacheOperationError
        assert translated.details == {"original_error": "ConnectionError"}

    def test_facade_errors_pass_through(self) -> None:
        error = InvalidArgumentError("already translated")
        assert translate_storage_error(error) is error

    def test_to_dict(self) -> None:
        error = CacheOperationError("boom", details={"key": "k"})
        assert error.to_dict() == {"error": "CacheOperationError", "message": "boom", "details": {"key": "k"}}
        assert isinstance(error, CacheError)
