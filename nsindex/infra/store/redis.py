"""
Redis Store Connection

The primitive command set the index is built on, over redis-py (async).

Features:
- Lazy client initialization for owned connections
- Injection of a pre-built redis.asyncio.Redis client (shared, not owned)
- bytes → str coercion for clients created without decode_responses
- RedisError wrapped into StoreError

Requirements:
    pip install redis
"""

from collections.abc import Mapping
from typing import Any

from redis.asyncio import Redis
from redis.exceptions import RedisError

from nsindex.common.observability import get_logger
from nsindex.common.utils import LazyClientInitializer
from nsindex.infra.config.groups import StoreConfig
from nsindex.infra.exceptions import StoreError

logger = get_logger(__name__)


def _text(value: Any) -> Any:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value


class RedisConnection:
    """
    Async Redis command interface.

    A connection built from host/port owns its client and closes it in
    close(). A connection wrapping an injected client never closes it: the
    caller that created the client owns its lifetime.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        password: str | None = None,
        db: int = 0,
        *,
        client: Redis | None = None,
        use_scan: bool = True,
        scan_count: int = 100,
    ) -> None:
        """
        Initialize the connection.

        Args:
            host: Redis host (default: localhost)
            port: Redis port (default: 6379)
            password: Optional Redis password
            db: Redis database number (default: 0)
            client: Pre-built client to share instead of creating one
            use_scan: Enumerate keys with SCAN (True) or KEYS (False)
            scan_count: SCAN COUNT hint
        """
        self.host = host
        self.port = port
        self.password = password
        self.db = db
        self.use_scan = use_scan
        self.scan_count = scan_count
        self.owns_client = client is None
        self._client_init: LazyClientInitializer[Redis] = LazyClientInitializer(client)

    @classmethod
    def from_config(cls, config: StoreConfig) -> "RedisConnection":
        return cls(
            host=config.host,
            port=config.port,
            password=config.password,
            db=config.db,
            use_scan=config.use_scan,
            scan_count=config.scan_count,
        )

    @classmethod
    def from_client(cls, client: Redis, *, use_scan: bool = True, scan_count: int = 100) -> "RedisConnection":
        """Wrap a shared client; close() will leave it open."""
        return cls(client=client, use_scan=use_scan, scan_count=scan_count)

    async def _get_client(self) -> Redis:
        return await self._client_init.get_or_create(self._create_client)

    def _create_client(self) -> Redis:
        logger.info(f"Opening Redis connection {self.host}:{self.port}/{self.db}")
        return Redis(
            host=self.host,
            port=self.port,
            password=self.password,
            db=self.db,
            decode_responses=True,
        )

    def _fail(self, operation: str, key: str | None, error: RedisError) -> StoreError:
        logger.error(f"Failed to {operation} key {key}: {error}")
        return StoreError(operation, key, error)

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    async def set_value(self, key: str, value: str) -> None:
        """SET key value (overwrite)."""
        try:
            client = await self._get_client()
            await client.set(key, value)
        except RedisError as e:
            raise self._fail("set", key, e) from e

    async def get_value(self, key: str) -> str | None:
        """GET key; None when the key does not exist."""
        try:
            client = await self._get_client()
            return _text(await client.get(key))
        except RedisError as e:
            raise self._fail("get", key, e) from e

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    async def lpush(self, key: str, value: str) -> int:
        """Prepend ``value``; returns the new list length."""
        try:
            client = await self._get_client()
            return await client.lpush(key, value)
        except RedisError as e:
            raise self._fail("lpush", key, e) from e

    async def lrange(self, key: str) -> list[str]:
        """Whole list, head first; [] when the key does not exist."""
        try:
            client = await self._get_client()
            items = await client.lrange(key, 0, -1)
            return [_text(item) for item in items]
        except RedisError as e:
            raise self._fail("lrange", key, e) from e

    # ------------------------------------------------------------------
    # Hashes
    # ------------------------------------------------------------------

    async def hset(self, key: str, mapping: Mapping[str, str]) -> int:
        """Set fields on a hash; returns the number of new fields."""
        try:
            client = await self._get_client()
            return await client.hset(key, mapping=dict(mapping))
        except RedisError as e:
            raise self._fail("hset", key, e) from e

    async def hgetall(self, key: str) -> dict[str, str]:
        """All fields of a hash; {} when the key does not exist."""
        try:
            client = await self._get_client()
            record = await client.hgetall(key)
            return {_text(field): _text(value) for field, value in record.items()}
        except RedisError as e:
            raise self._fail("hgetall", key, e) from e

    # ------------------------------------------------------------------
    # Keyspace
    # ------------------------------------------------------------------

    async def delete(self, key: str) -> bool:
        """
        Delete a key of any type.

        Returns:
            True if key was deleted, False if key didn't exist
        """
        try:
            client = await self._get_client()
            deleted = await client.delete(key)
            return deleted > 0
        except RedisError as e:
            raise self._fail("delete", key, e) from e

    async def scan_keys(self, pattern: str) -> list[str]:
        """
        Keys matching a glob pattern.

        SCAN is non-blocking for the server but may return a key twice if the
        keyspace is rehashed mid-iteration, so results are deduplicated.
        """
        try:
            client = await self._get_client()
            if not self.use_scan:
                return [_text(key) for key in await client.keys(pattern)]

            found: dict[str, None] = {}
            async for key in client.scan_iter(match=pattern, count=self.scan_count):
                found[_text(key)] = None
            return list(found)
        except RedisError as e:
            raise self._fail("scan", pattern, e) from e

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def ping(self) -> bool:
        """
        Check Redis connection health.

        Returns:
            True if Redis is reachable, False otherwise
        """
        try:
            client = await self._get_client()
            await client.ping()
            return True
        except (RedisError, OSError) as e:
            logger.error(f"Redis ping failed: {e}")
            return False

    async def close(self) -> None:
        """Close the client if this connection created it."""
        if not self.owns_client:
            return
        if client := self._client_init.get_if_exists():
            await client.aclose()
            self._client_init.reset()
            logger.info("Redis connection closed")
