"""query-tries: iterative search query tuning with engine-specific argument compilation."""

from __future__ import annotations

from typing import Any, Mapping

from query_tries.compiler import TryArgumentCompiler, build_search_request, substitute
from query_tries.config import QUERY_PLACEHOLDER, AppConfig, EngineDefaults, load_config
from query_tries.lifecycle import TryLifecycleManager, TrySequencer
from query_tries.models import (
    Case,
    CuratorVariable,
    SearchEngine,
    Try,
    TryFields,
    TryView,
)
from query_tries.store import InMemoryTryRepository, TryRepository
from query_tries.variables import CuratorVariableStore


def compile_args(
    template: str,
    search_engine: SearchEngine | str = SearchEngine.SOLR,
    variables: Mapping[str, str] | None = None,
    *,
    phrase: str | None = None,
    escape_query: bool = True,
) -> Any | None:
    """One-line convenience: compile a template without a stored try.

    Args:
        template: Raw query template (query string or JSON body).
        search_engine: Dialect tag, "solr" or "es".
        variables: Curator variable values for ``{name}`` placeholders.
        phrase: Live search phrase for ``#$query##``. Kept as-is when None.
        escape_query: Escape the phrase for the dialect before substitution.
    """
    return TryArgumentCompiler().compile(
        template,
        search_engine,
        variables,
        phrase=phrase,
        escape_query=escape_query,
    )


__all__ = [
    "AppConfig",
    "Case",
    "CuratorVariable",
    "CuratorVariableStore",
    "EngineDefaults",
    "InMemoryTryRepository",
    "QUERY_PLACEHOLDER",
    "SearchEngine",
    "Try",
    "TryArgumentCompiler",
    "TryFields",
    "TryLifecycleManager",
    "TryRepository",
    "TrySequencer",
    "TryView",
    "build_search_request",
    "compile_args",
    "load_config",
    "substitute",
]
