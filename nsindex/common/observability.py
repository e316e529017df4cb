"""
Logger access for every layer.

The first get_logger() call configures logging from Settings (NSINDEX_LOG_LEVEL,
NSINDEX_LOG_JSON, environment or .env), so library modules can call it at
import time without any setup by the caller.
"""

from typing import Any

from nsindex.common.logging_config import configure_logging
from nsindex.common.logging_config import get_logger as get_structured_logger
from nsindex.infra.config.settings import Settings

_LOGGER_CACHE: dict[str, Any] = {}
_INITIALIZED = False


def get_logger(name: str):
    """
    Get a structured logger, initializing logging on first call.

    Args:
        name: logger name (usually __name__)
    """
    global _INITIALIZED

    if not _INITIALIZED:
        _initialize_logging()
        _INITIALIZED = True

    if name in _LOGGER_CACHE:
        return _LOGGER_CACHE[name]

    logger = get_structured_logger(name)
    _LOGGER_CACHE[name] = logger
    return logger


def _initialize_logging() -> None:
    settings = Settings()
    configure_logging(level=settings.log_level, json_format=settings.log_json)


def reset_logging() -> None:
    """Reset logging state (tests)."""
    global _INITIALIZED
    _INITIALIZED = False
    _LOGGER_CACHE.clear()
