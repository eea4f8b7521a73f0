"""
simplecache — Core Error Types

Defines the exception hierarchy for the cache facade and the storage layer.
All exceptions inherit from SimpleCacheError for consistent error handling.

Two families:
- Facade errors (CacheError): what callers of the standardized cache
  contract see. Only InvalidArgumentError and CacheOperationError are raised.
- Storage errors (StorageError): what adapters, plugins and serializers raise.
  The facade translates them with translate_storage_error().
"""

from typing import Any


class SimpleCacheError(Exception):
    """Base exception for all simplecache errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(SimpleCacheError):
    """Raised when configuration is invalid or missing."""

    pass


# ------------ Facade errors ------------


class CacheError(SimpleCacheError):
    """Base exception for errors raised by the cache facade."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        original: BaseException | None = None,
    ):
        super().__init__(message, details)
        self.original = original


class InvalidArgumentError(CacheError, ValueError):
    """Raised for malformed keys, or when the adapter rejects an argument."""

    pass


class CacheOperationError(CacheError):
    """Raised when a cache operation fails in the adapter."""

    pass


# ------------ Storage errors ------------


class StorageError(SimpleCacheError):
    """Base exception for storage adapter failures."""

    pass


class StorageInvalidArgumentError(StorageError):
    """Raised by adapters when an operation receives an invalid argument."""

    pass


class SerializationError(StorageError):
    """Raised when a value cannot be encoded or a payload cannot be decoded."""

    def __init__(self, serializer: str, message: str, details: dict[str, Any] | None = None):
        error_details = details or {}
        error_details["serializer"] = serializer
        super().__init__(f"[{serializer}] {message}", error_details)


def translate_storage_error(error: BaseException) -> CacheError:
    """
    Translate an adapter failure into a facade error.

    Invalid-argument conditions reported by the adapter become
    InvalidArgumentError; everything else becomes CacheOperationError.
    The original error is kept on `.original`; callers should also
    `raise ... from error` so the chain is preserved in tracebacks.

    Args:
        error: Exception raised by the storage layer

    Returns:
        Facade exception wrapping the original
    """
    if isinstance(error, CacheError):
        return error

    error_class: type[CacheError] = (
        InvalidArgumentError if isinstance(error, StorageInvalidArgumentError) else CacheOperationError
    )
    details: dict[str, Any] = {"original_error": error.__class__.__name__}
    if isinstance(error, SimpleCacheError):
        details.update(error.details)

    return error_class(str(error), details=details, original=error)
