"""
Index Exceptions

Every error raised by nsindex derives from NamespacedIndexError.

- ConfigurationError: raised by the NamespacedIndex constructor
- InvalidArgumentError: raised by an operation before any store call
- StoreError: a Redis failure, wrapping the RedisError as __cause__
"""

from typing import Any


class NamespacedIndexError(Exception):
    """
    Base exception for nsindex.

    Attributes:
        message: Human-readable error message
        details: Additional context (dict)
        component: Which part failed
    """

    component = "index"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        base = f"[{self.component}] {self.message}"
        if self.details:
            base += f" | details={self.details}"
        return base


class ConfigurationError(NamespacedIndexError):
    """Index configuration cannot be resolved (e.g. unknown index type)."""

    component = "config"


class InvalidArgumentError(NamespacedIndexError):
    """Key or value rejected by validation."""

    component = "validation"


class StoreError(NamespacedIndexError):
    """The Redis connection or command failed."""

    component = "redis"

    def __init__(self, operation: str, key: str | None, cause: Exception):
        message = f"Failed to {operation}" + (f" key {key}" if key is not None else "") + f": {cause}"
        super().__init__(
            message,
            details={"operation": operation, "key": key, "cause": type(cause).__name__},
        )
        self.operation = operation
        self.key = key
        self.cause = cause
