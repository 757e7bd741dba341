"""Tests for TryArgumentCompiler."""

from __future__ import annotations

import json

import pytest

from query_tries.compiler import TryArgumentCompiler
from query_tries.exceptions import UnknownSearchEngineError
from query_tries.models import SearchEngine, Try


def _make_try(**overrides) -> Try:
    base = dict(
        case_id=1,
        try_no=1,
        name="Try 1",
        search_engine=SearchEngine.SOLR,
        search_url="http://localhost:8983/solr/select",
        field_spec="id:id, title:title",
        query_params="q=#$query##",
        escape_query=True,
        number_of_rows=10,
    )
    base.update(overrides)
    return Try(**base)


class TestSolrCompile:
    def setup_method(self):
        self.compiler = TryArgumentCompiler()

    def test_verbatim_phrase(self):
        args = self.compiler.compile("q=#$query##", "solr", phrase="hello", escape_query=False)
        assert args == {"q": ["hello"]}

    def test_escaped_phrase_with_ampersand(self):
        args = self.compiler.compile("q=#$query##", "solr", phrase="a&b", escape_query=True)
        assert args == {"q": ["a&b"]}

    def test_unescaped_phrase_with_ampersand_splits(self):
        args = self.compiler.compile("q=#$query##", "solr", phrase="a&b", escape_query=False)
        assert args == {"q": ["a"]}

    def test_stored_args_keep_placeholder(self):
        assert self.compiler.compile("q=#$query##", SearchEngine.SOLR) == {"q": ["#$query##"]}

    def test_curator_variables(self):
        args = self.compiler.compile(
            "q=#$query##&qf=title^{boost} overview", "solr", {"boost": "5"}
        )
        assert args == {"q": ["#$query##"], "qf": ["title^5 overview"]}

    def test_unresolved_variable_passes_through(self):
        args = self.compiler.compile("qf=title^{boost}", "solr")
        assert args == {"qf": ["title^{boost}"]}


class TestElasticsearchCompile:
    def setup_method(self):
        self.compiler = TryArgumentCompiler()

    def test_phrase_in_body(self):
        args = self.compiler.compile(
            '{ "query": "#$query##" }', "es", phrase='star "wars"', escape_query=True
        )
        assert args == {"query": 'star "wars"'}

    def test_unescaped_quote_breaks_body(self):
        args = self.compiler.compile(
            '{ "query": "#$query##" }', "es", phrase='star "wars"', escape_query=False
        )
        assert args is None

    def test_malformed_json(self):
        assert self.compiler.compile('{ "query": "#$query##"', "es") is None

    def test_numeric_variable(self):
        args = self.compiler.compile(
            '{"size": {rows}, "query": "#$query##"}', "es", {"rows": "5"}
        )
        assert args == {"size": 5, "query": "#$query##"}


class TestCompileProperties:
    def test_deterministic(self):
        compiler = TryArgumentCompiler()
        inputs = dict(
            template="q=#$query##&fq={type}&fq=year:[2000 TO *]&qf=title",
            search_engine="solr",
            variables={"type": "movie"},
        )
        first = compiler.compile(**inputs, phrase="alien", escape_query=True)
        second = compiler.compile(**inputs, phrase="alien", escape_query=True)
        assert first == second
        assert json.dumps(first) == json.dumps(second)

    def test_unknown_engine(self):
        with pytest.raises(UnknownSearchEngineError):
            TryArgumentCompiler().compile("q=x", "vespa")


class TestCompileTry:
    def test_uses_try_fields(self):
        try_ = _make_try(query_params="q=#$query##&rows=5", escape_query=False)
        args = TryArgumentCompiler().compile_try(try_, phrase="a b")
        assert args == {"q": ["a b"], "rows": ["5"]}

    def test_es_try(self):
        try_ = _make_try(
            search_engine=SearchEngine.ES,
            query_params='{"query": {"match": {"title": "#$query##"}}}',
        )
        args = TryArgumentCompiler().compile_try(try_, phrase="alien")
        assert args == {"query": {"match": {"title": "alien"}}}
