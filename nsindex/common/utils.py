"""
Common Utility Functions

LazyClientInitializer - build a network client on first use, once.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class LazyClientInitializer(Generic[T]):
    """
    Lazy client initialization.

    Concurrent first callers share one client: creation runs under an
    asyncio.Lock with a second check inside the lock.

    Usage:
        class RedisConnection:
            def __init__(self, host: str, port: int):
                self._client_init = LazyClientInitializer[Redis]()

            async def _get_client(self) -> Redis:
                return await self._client_init.get_or_create(
                    lambda: Redis(host=self.host, port=self.port)
                )
    """

    def __init__(self, client: T | None = None) -> None:
        self._client: T | None = client
        self._lock = asyncio.Lock()

    async def get_or_create(
        self,
        factory: Callable[[], T] | Callable[[], Awaitable[T]],
    ) -> T:
        """
        Return the client, creating it with ``factory`` if needed.

        Args:
            factory: sync or async callable returning the client

        Returns:
            The client instance
        """
        if self._client is not None:
            return self._client

        async with self._lock:
            if self._client is not None:
                return self._client

            result = factory()
            if asyncio.iscoroutine(result):
                self._client = await result  # type: ignore[assignment]
            else:
                self._client = result  # type: ignore[assignment]

            return self._client  # type: ignore[return-value]

    def get_if_exists(self) -> T | None:
        """Return the client if it was already created."""
        return self._client

    def reset(self) -> None:
        """Drop the client reference."""
        self._client = None
