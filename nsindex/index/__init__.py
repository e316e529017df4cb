"""Namespaced index."""

from nsindex.index.kinds import ABSENT, IndexKind
from nsindex.index.namespaced import NamespacedIndex

__all__ = ["ABSENT", "IndexKind", "NamespacedIndex"]
