"""
NamespacedIndex against a live Redis.

Uses NSINDEX_REDIS_HOST / NSINDEX_REDIS_PORT (default localhost:6379) and DB 15.
Skipped when Redis is not reachable.
"""

import asyncio
import random
import string
import time

import pytest
import pytest_asyncio
from redis.asyncio import Redis
from redis.exceptions import RedisError

from nsindex import ABSENT, IndexKind, NamespacedIndex, Settings

INDEX_NAMESPACE = "index_integration_test"
TEST_DB = 15


def _random_text(length: int) -> str:
    return "".join(random.choices(string.ascii_lowercase + string.digits, k=length))


@pytest_asyncio.fixture
async def redis_client():
    store = Settings().store
    client = Redis(host=store.host, port=store.port, password=store.password, db=TEST_DB, decode_responses=True)
    try:
        await client.ping()
    except (RedisError, OSError):
        await client.aclose()
        pytest.skip("Redis not available")

    yield client

    await client.aclose()


@pytest_asyncio.fixture
async def idx(redis_client):
    index = NamespacedIndex(INDEX_NAMESPACE, connection=redis_client)
    await index.clear()
    yield index
    await index.clear()


class TestListIndex:
    @pytest.mark.asyncio
    async def test_starts_empty(self, idx):
        assert await idx.size() == 0
        assert await idx.get("aaa") == []
        assert await idx.search("aaa") == []

    @pytest.mark.asyncio
    async def test_put_in_different_keys(self, idx):
        await asyncio.gather(
            idx.put("as", "the beste1"),
            idx.put("asa", "the beste2"),
            idx.put("asas", "the beste3"),
            idx.put("asasas", "the beste4"),
        )

        assert await idx.size() == 4
        assert sorted(await idx.search("asas")) == ["asas", "asasas"]

    @pytest.mark.asyncio
    async def test_sequential_puts_same_key(self, idx):
        for value in ("the beste1", "the beste2", "the beste3"):
            await idx.put("asabo", value)

        assert await idx.get("asabo") == ["the beste3", "the beste2", "the beste1"]

        await idx.delete("asabo")
        assert await idx.get("asabo") == []

    @pytest.mark.asyncio
    async def test_update(self, idx):
        await idx.put("asaba", "ABC")
        await idx.update("asaba", "ABC123")

        assert await idx.get("asaba") == ["ABC123"]

    @pytest.mark.asyncio
    async def test_many_items_single_key(self, idx):
        items = 2000

        await asyncio.gather(*(idx.put("D5320", _random_text(12)) for _ in range(items)))

        assert len(await idx.get("D5320")) == items
        assert await idx.search("D5320") == ["D5320"]

    @pytest.mark.asyncio
    async def test_random_keys_with_multiple_values(self, idx):
        before = await idx.size()
        keys = [_random_text(random.randint(2, 20)) + str(time.time_ns()) + str(n) for n in range(50)]

        await asyncio.gather(*(idx.put(key, _random_text(10)) for key in keys for _ in range(20)))

        assert await idx.size() == before + len(keys)


class TestOtherKinds:
    @pytest.mark.asyncio
    async def test_single(self, redis_client, idx):
        single = NamespacedIndex(INDEX_NAMESPACE, kind=IndexKind.SINGLE, connection=redis_client)

        assert await single.get("title") is ABSENT
        await single.put("title", "The Crown")
        assert await single.get("title") == "The Crown"

    @pytest.mark.asyncio
    async def test_unique_list(self, redis_client, idx):
        unique = NamespacedIndex(INDEX_NAMESPACE, kind=IndexKind.UNIQUE_LIST, connection=redis_client)

        await unique.put("k", "v1")
        await unique.put("k", "v1")
        await unique.put("k", "v2")

        assert await unique.get("k") == ["v2", "v1"]

    @pytest.mark.asyncio
    async def test_object(self, redis_client, idx):
        record = NamespacedIndex(INDEX_NAMESPACE, kind=IndexKind.OBJECT, connection=redis_client)

        await record.put("img", {"path": "/a.jpg"})
        await record.put("img", {"width": "640"})

        assert await record.get("img") == {"path": "/a.jpg", "width": "640"}
        await record.delete("img")
        assert await record.get("img") == {}


class TestSimultaneousReadAndWrite:
    @pytest.mark.asyncio
    async def test_sync_between_instances(self, redis_client, idx):
        idx2 = NamespacedIndex(INDEX_NAMESPACE, connection=redis_client)
        assert await idx.get("Netflix") == []
        assert await idx2.get("Netflix") == []

        await idx.update("Netflix", "The Crown")

        assert await idx.get("Netflix") == ["The Crown"]
        assert await idx2.get("Netflix") == ["The Crown"]

    @pytest.mark.asyncio
    async def test_reopened_index_with_own_connection(self, redis_client, idx):
        store = Settings().store
        config = {"host": store.host, "port": store.port, "password": store.password, "db": TEST_DB}

        for i in range(10):
            async with NamespacedIndex(INDEX_NAMESPACE, config) as reopened:
                await reopened.put("asaklint", f"the beste no {i}")

        assert len(await idx.get("asaklint")) == 10
