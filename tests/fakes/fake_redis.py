"""
Fake Redis for Unit Testing
"""

import re
from typing import Any

MUTATING_COMMANDS = {"set", "lpush", "hset", "delete"}


def glob_to_regex(pattern: str) -> re.Pattern:
    """Translate a Redis glob (with backslash escapes) to a regex."""
    parts = []
    i = 0
    while i < len(pattern):
        char = pattern[i]
        if char == "\\" and i + 1 < len(pattern):
            parts.append(re.escape(pattern[i + 1]))
            i += 2
            continue
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        elif char == "[":
            end = pattern.find("]", i + 1)
            if end == -1:
                parts.append(re.escape(char))
            else:
                body = pattern[i + 1 : end]
                if body.startswith("^"):
                    body = "^" + body[1:].replace("\\", "\\\\")
                else:
                    body = body.replace("\\", "\\\\")
                parts.append(f"[{body}]")
                i = end
        else:
            parts.append(re.escape(char))
        i += 1
    return re.compile("".join(parts) + r"\Z", re.DOTALL)


class FakeRedis:
    """
    In-memory redis.asyncio.Redis (decode_responses=True).

    Covers the commands the index uses: strings, lists, hashes, DEL,
    KEYS/SCAN. Every call is recorded in ``calls`` as (command, key).
    """

    def __init__(self):
        self.data: dict[str, Any] = {}
        self.calls: list[tuple[str, Any]] = []
        self.closed = False

    @property
    def mutations(self) -> list[tuple[str, Any]]:
        return [call for call in self.calls if call[0] in MUTATING_COMMANDS]

    async def set(self, key: str, value: str) -> bool:
        self.calls.append(("set", key))
        self.data[key] = value
        return True

    async def get(self, key: str) -> str | None:
        self.calls.append(("get", key))
        value = self.data.get(key)
        if value is not None and not isinstance(value, str):
            raise TypeError("WRONGTYPE")
        return value

    async def lpush(self, key: str, *values: str) -> int:
        self.calls.append(("lpush", key))
        items = self.data.setdefault(key, [])
        for value in values:
            items.insert(0, value)
        return len(items)

    async def lrange(self, key: str, start: int, end: int) -> list[str]:
        self.calls.append(("lrange", key))
        items = self.data.get(key, [])
        stop = None if end == -1 else end + 1
        return list(items[start:stop])

    async def hset(self, key: str, field=None, value=None, mapping=None) -> int:
        self.calls.append(("hset", key))
        record = self.data.setdefault(key, {})
        fields = dict(mapping or {})
        if field is not None:
            fields[field] = value
        added = len([name for name in fields if name not in record])
        record.update(fields)
        return added

    async def hgetall(self, key: str) -> dict[str, str]:
        self.calls.append(("hgetall", key))
        return dict(self.data.get(key, {}))

    async def delete(self, *keys: str) -> int:
        self.calls.append(("delete", keys[0] if len(keys) == 1 else keys))
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                removed += 1
        return removed

    async def keys(self, pattern: str = "*") -> list[str]:
        self.calls.append(("keys", pattern))
        regex = glob_to_regex(pattern)
        return [key for key in self.data if regex.match(key)]

    async def scan_iter(self, match: str | None = None, count: int | None = None):
        self.calls.append(("scan", match))
        regex = glob_to_regex(match or "*")
        for key in list(self.data):
            if regex.match(key):
                yield key

    async def ping(self) -> bool:
        return True

    async def aclose(self) -> None:
        self.closed = True
