"""Store command interface."""

from nsindex.infra.store.redis import RedisConnection

__all__ = ["RedisConnection"]
