"""Tests for the in-memory repository."""

from __future__ import annotations

import asyncio

import pytest

from query_tries.models import SearchEngine, Try
from query_tries.store import InMemoryTryRepository, TryRepository


def _make_try(case_id: int, try_no: int) -> Try:
    return Try(
        case_id=case_id,
        try_no=try_no,
        name=f"Try {try_no}",
        search_engine=SearchEngine.SOLR,
        search_url="http://localhost:8983/solr/select",
        field_spec="id:id",
        query_params="q=#$query##",
        args={"q": ["#$query##"]},
    )


class TestCases:
    @pytest.mark.asyncio
    async def test_create_assigns_ids(self):
        repo = InMemoryTryRepository()
        first = await repo.create_case("first")
        second = await repo.create_case("second")
        assert (first.id, second.id) == (1, 2)
        assert first.last_try == 0

    @pytest.mark.asyncio
    async def test_get_missing_case(self):
        assert await InMemoryTryRepository().get_case(42) is None

    @pytest.mark.asyncio
    async def test_increment_last_try(self):
        repo = InMemoryTryRepository()
        case = await repo.create_case("c")
        assert await repo.increment_last_try(case.id) == 1
        assert await repo.increment_last_try(case.id) == 2
        assert (await repo.get_case(case.id)).last_try == 2

    @pytest.mark.asyncio
    async def test_increment_missing_case(self):
        assert await InMemoryTryRepository().increment_last_try(7) is None

    @pytest.mark.asyncio
    async def test_concurrent_increments_are_distinct(self):
        repo = InMemoryTryRepository()
        case = await repo.create_case("c")
        numbers = await asyncio.gather(*[repo.increment_last_try(case.id) for _ in range(25)])
        assert sorted(numbers) == list(range(1, 26))


class TestTries:
    @pytest.mark.asyncio
    async def test_save_and_get_returns_copy(self):
        repo = InMemoryTryRepository()
        await repo.save_try(_make_try(1, 1))

        fetched = await repo.get_try(1, 1)
        fetched.args["q"].append("mutated")

        again = await repo.get_try(1, 1)
        assert again.args == {"q": ["#$query##"]}

    @pytest.mark.asyncio
    async def test_list_ordered_by_try_no(self):
        repo = InMemoryTryRepository()
        for no in (3, 1, 2):
            await repo.save_try(_make_try(1, no))
        await repo.save_try(_make_try(2, 9))

        tries = await repo.list_tries(1)
        assert [t.try_no for t in tries] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_delete_cascades_variables(self):
        repo = InMemoryTryRepository()
        await repo.save_try(_make_try(1, 1))
        await repo.save_try(_make_try(1, 2))
        await repo.replace_curator_variables(1, 1, {"a": "1", "b": "2"})
        await repo.replace_curator_variables(1, 2, {"c": "3"})
        assert await repo.count_curator_variables() == 3

        assert await repo.delete_try(1, 1) is True
        assert await repo.get_try(1, 1) is None
        assert await repo.get_curator_variables(1, 1) == {}
        assert await repo.count_curator_variables() == 1

    @pytest.mark.asyncio
    async def test_delete_missing(self):
        assert await InMemoryTryRepository().delete_try(1, 1) is False

    @pytest.mark.asyncio
    async def test_replace_with_empty_removes_records(self):
        repo = InMemoryTryRepository()
        await repo.replace_curator_variables(1, 1, {"a": "1"})
        await repo.replace_curator_variables(1, 1, {})
        assert await repo.count_curator_variables() == 0


def test_is_repository():
    assert isinstance(InMemoryTryRepository(), TryRepository)
