"""Dialect lookup by search engine tag."""

from __future__ import annotations

from query_tries.dialects.base import Dialect
from query_tries.exceptions import UnknownSearchEngineError
from query_tries.models import SearchEngine


def get_dialect(search_engine: SearchEngine | str) -> Dialect:
    """Return the dialect for a search engine tag."""
    tag = search_engine.value if isinstance(search_engine, SearchEngine) else search_engine
    match tag:
        case "solr":
            from query_tries.dialects.solr import SolrDialect

            return SolrDialect()
        case "es":
            from query_tries.dialects.es import ElasticsearchDialect

            return ElasticsearchDialect()
        case _:
            raise UnknownSearchEngineError(
                f"Unknown search engine: {tag} (supported: {', '.join(supported_engines())})"
            )


def supported_engines() -> list[str]:
    return [engine.value for engine in SearchEngine]
