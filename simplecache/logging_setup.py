"""
simplecache — Logging Setup

Applies the process-wide logging format. Library modules only create
module loggers; applications call configure_logging() once at startup.
"""

import logging

from .config import LogLevel, SimpleCacheConfig

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | LogLevel | SimpleCacheConfig | None = None) -> None:
    """
    Configure root logging.

    Args:
        level: Log level name, LogLevel, or a config whose log_level is used
            (default: INFO)
    """
    if isinstance(level, SimpleCacheConfig):
        level = level.log_level
    name = str(getattr(level, "value", level) or LogLevel.INFO.value).upper()

    logging.basicConfig(level=getattr(logging, name, logging.INFO), format=LOG_FORMAT)
    logging.getLogger(__name__).debug("Logging configured at %s", name)
