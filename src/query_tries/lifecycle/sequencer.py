"""Per-case try numbering."""

from __future__ import annotations

from query_tries.exceptions import CaseNotFoundError
from query_tries.store.base import TryRepository


class TrySequencer:
    """Hand out try numbers that are never reused within a case."""

    def __init__(self, repository: TryRepository) -> None:
        self._repository = repository

    async def next_try_no(self, case_id: int) -> int:
        try_no = await self._repository.increment_last_try(case_id)
        if try_no is None:
            raise CaseNotFoundError(case_id)
        return try_no
