"""Tests for library public API."""

from __future__ import annotations

import query_tries


class TestPublicAPI:
    def test_all_exports_importable(self):
        for name in query_tries.__all__:
            obj = getattr(query_tries, name, None)
            assert obj is not None, f"{name} not importable from query_tries"

    def test_compile_args_solr(self):
        args = query_tries.compile_args("q=#$query##", "solr", phrase="hello", escape_query=False)
        assert args == {"q": ["hello"]}

    def test_compile_args_defaults_to_solr(self):
        assert query_tries.compile_args("q=*:*") == {"q": ["*:*"]}

    def test_compile_args_es_with_variables(self):
        args = query_tries.compile_args(
            '{"size": {rows}, "query": "#$query##"}', "es", {"rows": "3"}, phrase="x"
        )
        assert args == {"size": 3, "query": "x"}

    def test_placeholder_constant(self):
        assert query_tries.QUERY_PLACEHOLDER == "#$query##"
