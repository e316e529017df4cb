"""
Test Fakes Module

In-memory stand-ins for external services, used by unit tests.
"""

from tests.fakes.fake_redis import FakeRedis

__all__ = ["FakeRedis"]
