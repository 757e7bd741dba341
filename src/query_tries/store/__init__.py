"""Persistence boundary for cases, tries and curator variables."""

from query_tries.store.base import TryRepository
from query_tries.store.memory import InMemoryTryRepository

__all__ = ["InMemoryTryRepository", "TryRepository"]
