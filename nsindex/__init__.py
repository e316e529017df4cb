"""
nsindex - namespaced indexes over Redis.

Four storage shapes (single string, list, unique list, object) addressed by
application keys, with every physical key prefixed by a namespace.

Usage:
    from nsindex import IndexKind, NamespacedIndex

    async with NamespacedIndex("photos", kind=IndexKind.UNIQUE_LIST) as idx:
        await idx.put("2024", "IMG_0001.jpg")
        await idx.get("2024")  # ["IMG_0001.jpg"]
"""

from nsindex.index.kinds import ABSENT, NAMESPACE_SEPARATOR, IndexKind
from nsindex.index.namespaced import NamespacedIndex
from nsindex.infra.config import IndexConfig, Settings, StoreConfig
from nsindex.infra.exceptions import (
    ConfigurationError,
    InvalidArgumentError,
    NamespacedIndexError,
    StoreError,
)
from nsindex.infra.store.redis import RedisConnection

__version__ = "0.1.0"

__all__ = [
    "ABSENT",
    "NAMESPACE_SEPARATOR",
    "ConfigurationError",
    "IndexConfig",
    "IndexKind",
    "InvalidArgumentError",
    "NamespacedIndex",
    "NamespacedIndexError",
    "RedisConnection",
    "Settings",
    "StoreConfig",
    "StoreError",
]
