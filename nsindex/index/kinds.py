"""
Index kinds and key helpers.

IndexKind values are the configuration strings accepted as ``index_type``.
"""

import re
from enum import Enum

from nsindex.infra.exceptions import ConfigurationError

NAMESPACE_SEPARATOR = ":"

# Redis glob metacharacters (plus the escape character itself)
_GLOB_SPECIAL = re.compile(r"([\\*?\[\]])")


class IndexKind(str, Enum):
    """Storage shape of an index, fixed for the index's lifetime."""

    SINGLE = "string"  # one string per key (SET/GET)
    LIST = "strings"  # most-recent-first list, duplicates kept (LPUSH/LRANGE)
    UNIQUE_LIST = "strings_unique"  # LIST deduplicated by value
    OBJECT = "object"  # flat field -> string record (HSET/HGETALL)

    @classmethod
    def parse(cls, value: "IndexKind | str | None") -> "IndexKind":
        """
        Resolve a configured index type.

        None selects LIST. Unknown values raise ConfigurationError.
        """
        if value is None:
            return cls.LIST
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
        raise ConfigurationError(
            f"Unknown index type: {value!r}",
            details={"allowed": [kind.value for kind in cls]},
        )

    @property
    def is_list(self) -> bool:
        return self in (IndexKind.LIST, IndexKind.UNIQUE_LIST)


class Absent(Enum):
    """Type of ABSENT, the result of get() for an unwritten SINGLE key."""

    ABSENT = "absent"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = Absent.ABSENT


def normalize_namespace(namespace: str) -> str:
    """Append the separator to a non-empty namespace that lacks it."""
    if not isinstance(namespace, str):
        raise ConfigurationError(f"Namespace must be a string, got {type(namespace).__name__}")
    if namespace and not namespace.endswith(NAMESPACE_SEPARATOR):
        return namespace + NAMESPACE_SEPARATOR
    return namespace


def escape_glob(text: str) -> str:
    """Escape Redis glob metacharacters so ``text`` matches literally."""
    return _GLOB_SPECIAL.sub(r"\\\1", text)
