"""In-process repository used by the MCP server, CLI and tests."""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict

from query_tries.models import Case, CuratorVariable, Try
from query_tries.store.base import TryRepository

logger = logging.getLogger(__name__)


class InMemoryTryRepository(TryRepository):
    """Dict-backed repository.

    Tries and curator variables are kept in separate tables so deleting a
    try cascades explicitly. ``increment_last_try`` holds a per-case
    ``asyncio.Lock``.
    """

    def __init__(self) -> None:
        self._cases: dict[int, Case] = {}
        self._tries: dict[tuple[int, int], Try] = {}
        self._variables: dict[tuple[int, int], list[CuratorVariable]] = {}
        self._locks: defaultdict[int, asyncio.Lock] = defaultdict(asyncio.Lock)
        self._next_case_id = 1

    async def create_case(self, name: str) -> Case:
        case = Case(id=self._next_case_id, name=name)
        self._cases[case.id] = case
        self._next_case_id += 1
        return case.model_copy()

    async def get_case(self, case_id: int) -> Case | None:
        case = self._cases.get(case_id)
        return case.model_copy() if case else None

    async def increment_last_try(self, case_id: int) -> int | None:
        async with self._locks[case_id]:
            case = self._cases.get(case_id)
            if case is None:
                return None
            case.last_try += 1
            return case.last_try

    async def list_tries(self, case_id: int) -> list[Try]:
        tries = [t for (cid, _), t in self._tries.items() if cid == case_id]
        return [t.model_copy(deep=True) for t in sorted(tries, key=lambda t: t.try_no)]

    async def get_try(self, case_id: int, try_no: int) -> Try | None:
        try_ = self._tries.get((case_id, try_no))
        return try_.model_copy(deep=True) if try_ else None

    async def save_try(self, try_: Try) -> None:
        self._tries[(try_.case_id, try_.try_no)] = try_.model_copy(deep=True)

    async def delete_try(self, case_id: int, try_no: int) -> bool:
        key = (case_id, try_no)
        if self._tries.pop(key, None) is None:
            return False
        removed = self._variables.pop(key, [])
        logger.debug(
            "Deleted try %s/%s with %d curator variables", case_id, try_no, len(removed)
        )
        return True

    async def get_curator_variables(self, case_id: int, try_no: int) -> dict[str, str]:
        return {v.name: v.value for v in self._variables.get((case_id, try_no), [])}

    async def replace_curator_variables(
        self, case_id: int, try_no: int, variables: dict[str, str]
    ) -> None:
        records = [CuratorVariable(name=k, value=v) for k, v in variables.items()]
        if records:
            self._variables[(case_id, try_no)] = records
        else:
            self._variables.pop((case_id, try_no), None)

    async def count_curator_variables(self) -> int:
        return sum(len(records) for records in self._variables.values())
