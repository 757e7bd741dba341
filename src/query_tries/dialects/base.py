"""Search engine dialect abstraction."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class Dialect(ABC):
    """Abstract base class for search engine template dialects.

    Each dialect knows how to escape the live search phrase for its
    grammar and how to turn a fully substituted template into the
    argument structure the engine expects. Materialization is pure and
    never raises for malformed input.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Search engine tag handled by this dialect (e.g. 'solr')."""
        ...

    @abstractmethod
    def escape(self, phrase: str) -> str:
        """Escape the search phrase for safe inclusion in a template."""
        ...

    @abstractmethod
    def materialize(self, text: str) -> Any | None:
        """Parse substituted template text. Returns None if unparsable."""
        ...
