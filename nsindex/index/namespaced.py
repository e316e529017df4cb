"""
Namespaced Index

CRUD over Redis for one index kind, with every application key prefixed by
the index namespace.

Physical layout per kind:
    SINGLE       SET / GET            -> str | ABSENT
    LIST         LPUSH / LRANGE 0 -1  -> list[str], most recent first
    UNIQUE_LIST  LRANGE + LPUSH       -> list[str], no repeated values
    OBJECT       HSET / HGETALL       -> dict[str, str]

The index keeps no data of its own. Every read goes to Redis, so indexes
sharing a namespace (in one process or many) observe each other's writes.

Concurrency notes:
    - update() is DEL then put, awaited in sequence; a failing put leaves the
      key deleted.
    - clear() and put_many() fan out with asyncio.gather and race freely.
    - UNIQUE_LIST put() reads the list then pushes. Two concurrent puts of the
      same new value can both see it missing and both push it.
"""

import asyncio
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError
from redis.asyncio import Redis

from nsindex.common.observability import get_logger
from nsindex.index.kinds import ABSENT, Absent, IndexKind, escape_glob, normalize_namespace
from nsindex.infra.config.groups import IndexConfig
from nsindex.infra.config.settings import Settings
from nsindex.infra.exceptions import ConfigurationError, InvalidArgumentError
from nsindex.infra.store.redis import RedisConnection

logger = get_logger(__name__)

IndexValue = str | Mapping[str, str]
IndexResult = str | Absent | list[str] | dict[str, str]


class NamespacedIndex:
    """
    One logical index inside a shared Redis keyspace.

    Usage:
        idx = NamespacedIndex("tags", {"host": "localhost", "indexType": "strings_unique"})
        await idx.put("beach", "IMG_0001.jpg")
        await idx.get("beach")   # ["IMG_0001.jpg"]
        await idx.search("bea")  # ["beach"]
        await idx.close()

    Sharing one client between indexes:
        client = Redis(decode_responses=True)
        photos = NamespacedIndex("photos", kind=IndexKind.OBJECT, connection=client)
        tags = NamespacedIndex("tags", connection=client)
    """

    def __init__(
        self,
        namespace: str = "",
        config: IndexConfig | Mapping[str, Any] | None = None,
        *,
        kind: IndexKind | str | None = None,
        connection: RedisConnection | Redis | None = None,
    ) -> None:
        """
        Args:
            namespace: key prefix; the ":" separator is appended when missing
            config: IndexConfig or a mapping with host/port/db/password/
                index_type (or indexType) and optionally ``client``
            kind: index kind, overriding config.index_type
            connection: RedisConnection or redis.asyncio.Redis client to share

        Raises:
            ConfigurationError: unknown index type, invalid config or namespace
        """
        config, client = self._resolve_config(config)
        if connection is None:
            connection = client

        self._namespace = normalize_namespace(namespace)
        self._kind = IndexKind.parse(kind if kind is not None else config.index_type)

        if connection is None:
            self._connection = RedisConnection.from_config(config)
            self._owns_connection = True
        elif isinstance(connection, RedisConnection):
            self._connection = connection
            self._owns_connection = False
        else:
            self._connection = RedisConnection.from_client(
                connection, use_scan=config.use_scan, scan_count=config.scan_count
            )
            self._owns_connection = False

        logger.debug(f"NamespacedIndex initialized: namespace={self._namespace!r}, kind={self._kind.value}")

    @staticmethod
    def _resolve_config(
        config: IndexConfig | Mapping[str, Any] | None,
    ) -> tuple[IndexConfig, Any]:
        if config is None:
            return IndexConfig(), None
        if isinstance(config, IndexConfig):
            return config, None
        if not isinstance(config, Mapping):
            raise ConfigurationError(f"Unsupported config type: {type(config).__name__}")

        options = dict(config)
        client = options.pop("client", None)
        try:
            return IndexConfig.model_validate(options), client
        except ValidationError as e:
            raise ConfigurationError(f"Invalid index config: {e}", details={"errors": e.errors()}) from e

    @classmethod
    def from_settings(
        cls,
        namespace: str = "",
        settings: Settings | None = None,
        *,
        kind: IndexKind | str | None = None,
        connection: RedisConnection | Redis | None = None,
    ) -> "NamespacedIndex":
        """Build an index from NSINDEX_* environment settings."""
        settings = settings or Settings()
        return cls(namespace, settings.index_config(), kind=kind, connection=connection)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def kind(self) -> IndexKind:
        return self._kind

    @property
    def connection(self) -> RedisConnection:
        return self._connection

    def __repr__(self) -> str:
        return f"NamespacedIndex(namespace={self._namespace!r}, kind={self._kind.value})"

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _physical(self, key: str) -> str:
        return self._namespace + key

    @staticmethod
    def _check_key(key: Any) -> str:
        if not isinstance(key, str) or not key:
            raise InvalidArgumentError(
                "Key must be a non-empty string",
                details={"key_type": type(key).__name__},
            )
        return key

    def _check_value(self, value: Any) -> IndexValue:
        if value is None:
            raise InvalidArgumentError("Value must not be None")

        if self._kind is IndexKind.OBJECT:
            if not isinstance(value, Mapping):
                raise InvalidArgumentError(
                    "Value must be a mapping when storing objects",
                    details={"value_type": type(value).__name__},
                )
            bad = [field for field, item in value.items() if not isinstance(field, str) or not isinstance(item, str)]
            if bad:
                raise InvalidArgumentError(
                    "Object fields and values must be strings",
                    details={"fields": [repr(field) for field in bad]},
                )
            return value

        if not isinstance(value, str):
            raise InvalidArgumentError(
                "Value must be a string when storing strings",
                details={"value_type": type(value).__name__, "kind": self._kind.value},
            )
        return value

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    async def put(self, key: str, value: IndexValue) -> None:
        """
        Store ``value`` under ``key``.

        SINGLE overwrites, LIST prepends, UNIQUE_LIST prepends unless the
        value is already present, OBJECT merges the given fields.

        Raises:
            InvalidArgumentError: bad key or value; nothing is written
            StoreError: Redis failure
        """
        self._check_key(key)
        value = self._check_value(value)
        await self._write(key, value)

    async def _write(self, key: str, value: IndexValue) -> None:
        physical = self._physical(key)

        if self._kind is IndexKind.SINGLE:
            await self._connection.set_value(physical, value)
        elif self._kind is IndexKind.LIST:
            await self._connection.lpush(physical, value)
        elif self._kind is IndexKind.UNIQUE_LIST:
            current = await self._connection.lrange(physical)
            if value in current:
                logger.debug(f"Skipping duplicate value for {physical}")
                return
            await self._connection.lpush(physical, value)
        else:
            if not value:
                return
            await self._connection.hset(physical, value)

    async def get(self, key: str) -> IndexResult:
        """
        Current value(s) for ``key``.

        Unknown keys are not an error: SINGLE returns ABSENT, list kinds
        return [], OBJECT returns {}.
        """
        self._check_key(key)
        physical = self._physical(key)

        if self._kind is IndexKind.SINGLE:
            value = await self._connection.get_value(physical)
            return ABSENT if value is None else value
        if self._kind.is_list:
            return await self._connection.lrange(physical)
        return await self._connection.hgetall(physical)

    async def delete(self, key: str) -> bool:
        """Remove all data for ``key``. Returns False if there was none."""
        self._check_key(key)
        return await self._connection.delete(self._physical(key))

    async def update(self, key: str, value: IndexValue) -> None:
        """
        Replace the data for ``key``: delete, then put.

        Both arguments are validated before the delete. If the put fails the
        key stays deleted.
        """
        self._check_key(key)
        value = self._check_value(value)
        await self._connection.delete(self._physical(key))
        await self._write(key, value)

    async def put_many(self, items: Mapping[str, IndexValue] | Iterable[tuple[str, IndexValue]]) -> int:
        """
        Put several entries concurrently.

        All entries are validated first; then the puts run together with no
        ordering between them. Returns the number of entries written.
        """
        pairs = list(items.items()) if isinstance(items, Mapping) else list(items)
        checked = [self._check_pair(pair) for pair in pairs]
        await asyncio.gather(*(self._write(key, value) for key, value in checked))
        return len(checked)

    def _check_pair(self, item: Any) -> tuple[str, IndexValue]:
        pair = tuple(item) if isinstance(item, Iterable) and not isinstance(item, str | bytes) else None
        if pair is None or len(pair) != 2:
            raise InvalidArgumentError(
                "Each item must be a (key, value) pair",
                details={"item_type": type(item).__name__},
            )
        key, value = pair
        return self._check_key(key), self._check_value(value)

    # ------------------------------------------------------------------
    # Keyspace
    # ------------------------------------------------------------------

    async def search(self, pattern: str) -> list[str]:
        """
        Application keys starting with ``pattern``.

        ``pattern`` keeps Redis glob semantics (``*``, ``?``, ``[...]``); the
        namespace is matched literally. Order is unspecified.
        """
        if not isinstance(pattern, str):
            raise InvalidArgumentError(
                "Search pattern must be a string",
                details={"pattern_type": type(pattern).__name__},
            )
        physical_keys = await self._connection.scan_keys(escape_glob(self._namespace) + pattern + "*")
        offset = len(self._namespace)
        return [physical[offset:] for physical in physical_keys]

    async def keys(self) -> list[str]:
        """All application keys in the namespace."""
        return await self.search("")

    async def size(self) -> int:
        """Number of keys in the namespace."""
        return len(await self.keys())

    async def clear(self) -> int:
        """
        Delete every key in the namespace.

        Keys are read once, then deleted concurrently. Keys written after the
        read survive. Returns the number of keys read.
        """
        keys = await self.keys()
        await asyncio.gather(*(self._connection.delete(self._physical(key)) for key in keys))
        logger.info(f"Cleared {len(keys)} keys from namespace {self._namespace!r}")
        return len(keys)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def ping(self) -> bool:
        return await self._connection.ping()

    async def close(self) -> None:
        """Close the connection if this index created it."""
        if self._owns_connection:
            await self._connection.close()

    async def __aenter__(self) -> "NamespacedIndex":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
