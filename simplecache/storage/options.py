"""
simplecache — Adapter Options

Mutable per-adapter settings, validated on assignment.
"""

from pydantic import BaseModel, ConfigDict, Field


class AdapterOptions(BaseModel):
    """Options shared by all storage adapters."""

    ttl: int = Field(default=0, ge=0, description="Default TTL in seconds applied when a write passes none (0 = no expiry)")
    namespace: str = Field(default="simplecache", description="Key namespace/prefix")
    readable: bool = Field(default=True, description="Reads return misses when disabled")
    writable: bool = Field(default=True, description="Writes are skipped when disabled")

    model_config = ConfigDict(validate_assignment=True)


class MemoryAdapterOptions(AdapterOptions):
    """Options for the in-memory adapter."""

    max_size: int = Field(default=1000, ge=1, description="Max entries before LRU eviction")


class RedisAdapterOptions(AdapterOptions):
    """Options for the Redis adapter."""

    redis_url: str = Field(description="Redis connection URL, e.g. redis://localhost:6379/0")
    max_connections: int = Field(default=10, ge=1, description="Connection pool size")
    socket_timeout: int = Field(default=5, ge=1, description="Socket timeout in seconds")
