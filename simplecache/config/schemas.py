"""
simplecache — Configuration Schemas

Defines typed configuration models using Pydantic for validation and type safety.
All configuration must be defined here and validated at load time.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Environment(str, Enum):
    """Runtime environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"


class AdapterBackend(str, Enum):
    """Bundled storage adapters."""

    MEMORY = "memory"
    REDIS = "redis"


class SerializerName(str, Enum):
    """Registered value serializers."""

    JSON = "json"
    PICKLE = "pickle"


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class StorageConfig(BaseModel):
    """Storage adapter configuration."""

    adapter: AdapterBackend = Field(default=AdapterBackend.MEMORY, description="Storage adapter to use")
    ttl_seconds: int = Field(default=0, ge=0, description="Adapter default TTL in seconds (0 = no expiry)")
    max_size: int = Field(default=1000, ge=1, description="Max entries (memory adapter)")
    namespace: str = Field(default="simplecache", description="Key namespace/prefix")

    # Redis-specific settings (only used when adapter=redis)
    redis_url: str | None = Field(default=None, description="Redis connection URL")
    redis_max_connections: int = Field(default=10, ge=1, description="Redis connection pool size")
    redis_socket_timeout: int = Field(default=5, ge=1, description="Redis socket timeout in seconds")

    @field_validator("redis_url")
    @classmethod
    def validate_redis_url(cls, v: str | None, info: Any) -> str | None:
        """Ensure redis_url is provided when adapter is redis."""
        adapter = info.data.get("adapter")
        if adapter == AdapterBackend.REDIS and not v:
            raise ValueError("redis_url is required when storage adapter is 'redis'")
        return v


class SerializerConfig(BaseModel):
    """Value serialization configuration."""

    name: SerializerName = Field(default=SerializerName.JSON, description="Serializer used to encode values")
    plugin_enabled: bool = Field(
        default=False,
        description="Attach the serializer plugin to the adapter instead of serializing in the facade",
    )
    priority: int = Field(default=1, description="Interceptor priority of the serializer plugin")


class SimpleCacheConfig(BaseModel):
    """Root configuration for simplecache."""

    environment: Environment = Field(default=Environment.DEVELOPMENT, description="Runtime environment")
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")

    storage: StorageConfig = Field(default_factory=StorageConfig)
    serializer: SerializerConfig = Field(default_factory=SerializerConfig)

    model_config = ConfigDict(use_enum_values=True, validate_assignment=True)
