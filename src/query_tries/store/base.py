"""Repository abstraction for case/try persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod

from query_tries.models import Case, Try


class TryRepository(ABC):
    """Abstract base class for try persistence backends.

    Implementations own case-scoped uniqueness of ``try_no`` and must
    make ``increment_last_try`` atomic per case.
    """

    @abstractmethod
    async def create_case(self, name: str) -> Case:
        ...

    @abstractmethod
    async def get_case(self, case_id: int) -> Case | None:
        ...

    @abstractmethod
    async def increment_last_try(self, case_id: int) -> int | None:
        """Bump the case's ``last_try`` and return the new value.

        Returns None if the case does not exist.
        """
        ...

    @abstractmethod
    async def list_tries(self, case_id: int) -> list[Try]:
        """All tries of a case ordered by ``try_no``."""
        ...

    @abstractmethod
    async def get_try(self, case_id: int, try_no: int) -> Try | None:
        ...

    @abstractmethod
    async def save_try(self, try_: Try) -> None:
        """Insert or replace a try keyed by (case_id, try_no)."""
        ...

    @abstractmethod
    async def delete_try(self, case_id: int, try_no: int) -> bool:
        """Delete a try and its curator variables. False if missing."""
        ...

    @abstractmethod
    async def get_curator_variables(self, case_id: int, try_no: int) -> dict[str, str]:
        ...

    @abstractmethod
    async def replace_curator_variables(
        self, case_id: int, try_no: int, variables: dict[str, str]
    ) -> None:
        ...

    @abstractmethod
    async def count_curator_variables(self) -> int:
        """Total curator variable records across all tries."""
        ...
