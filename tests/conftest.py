"""
Global test configuration and fixtures
"""

import pytest

from nsindex import IndexKind, NamespacedIndex
from tests.fakes import FakeRedis


@pytest.fixture
def fake_redis() -> FakeRedis:
    """Empty in-memory Redis."""
    return FakeRedis()


@pytest.fixture
def make_index(fake_redis):
    """Factory for indexes sharing ``fake_redis``."""

    def _make(namespace: str = "index_unit_test", kind: IndexKind | str = IndexKind.LIST) -> NamespacedIndex:
        return NamespacedIndex(namespace, kind=kind, connection=fake_redis)

    return _make


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (need a live Redis)")


def pytest_collection_modifyitems(config, items):
    """Path-based markers."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
