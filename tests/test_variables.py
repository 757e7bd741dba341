"""Tests for the curator variable store."""

from __future__ import annotations

import pytest

from query_tries.exceptions import InvalidCuratorVariableError
from query_tries.models import CuratorVariable
from query_tries.variables import CuratorVariableStore


class TestCuratorVariableStore:
    def test_set_and_map(self):
        store = CuratorVariableStore()
        store.set("b", "2")
        store.set("a", 1)
        assert store.as_map() == {"a": "1", "b": "2"}
        assert list(store.as_map()) == ["a", "b"]
        assert len(store) == 2
        assert "a" in store

    def test_remove(self):
        store = CuratorVariableStore({"a": "1"})
        assert store.remove("a") is True
        assert store.remove("a") is False
        assert store.as_map() == {}

    def test_on_change_called_for_mutations(self):
        calls = []
        store = CuratorVariableStore({"a": "1"}, on_change=lambda: calls.append(1))
        store.set("b", "2")
        store.remove("a")
        store.remove("missing")
        assert len(calls) == 2

    def test_initial_values_do_not_signal(self):
        calls = []
        CuratorVariableStore({"a": "1"}, on_change=lambda: calls.append(1))
        assert calls == []

    def test_from_records(self):
        store = CuratorVariableStore([CuratorVariable(name="boost", value="3")])
        assert store.as_map() == {"boost": "3"}

    @pytest.mark.parametrize("name", ["", "has space", "dash-name", "{x}"])
    def test_invalid_names(self, name):
        with pytest.raises(InvalidCuratorVariableError):
            CuratorVariableStore().set(name, "1")
