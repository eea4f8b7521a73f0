"""Storage adapter plugins."""

from .serializer import SerializerPlugin

__all__ = ["SerializerPlugin"]
