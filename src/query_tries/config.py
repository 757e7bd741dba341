"""Configuration loading for query-tries."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from query_tries.exceptions import UnknownSearchEngineError

QUERY_PLACEHOLDER = "#$query##"


class EngineDefaults(BaseModel):
    search_url: str
    field_spec: str
    query_params: str
    escape_query: bool = True
    number_of_rows: int = 10


def _default_engines() -> dict[str, EngineDefaults]:
    return {
        "solr": EngineDefaults(
            search_url="http://localhost:8983/solr/select",
            field_spec="id:id, title:title",
            query_params=f"q={QUERY_PLACEHOLDER}",
        ),
        "es": EngineDefaults(
            search_url="http://localhost:9200/_search",
            field_spec="id:_id, title:title",
            query_params=f'{{"query": "{QUERY_PLACEHOLDER}"}}',
        ),
    }


class AppConfig(BaseModel):
    default_search_engine: str = "solr"
    engines: dict[str, EngineDefaults] = Field(default_factory=_default_engines)
    try_name_prefix: str = "Try"

    def defaults_for(self, search_engine: str) -> EngineDefaults:
        try:
            return self.engines[search_engine]
        except KeyError:
            raise UnknownSearchEngineError(
                f"No defaults configured for search engine: {search_engine}"
            ) from None


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def load_config(env_path: str | Path | None = None) -> AppConfig:
    """Load configuration from environment variables (.env file)."""
    if env_path:
        load_dotenv(env_path)
    else:
        load_dotenv()

    base = _default_engines()
    rows = int(os.getenv("DEFAULT_NUMBER_OF_ROWS", "10"))
    escape = _env_bool("DEFAULT_ESCAPE_QUERY", True)

    engines = {
        "solr": EngineDefaults(
            search_url=os.getenv("SOLR_SEARCH_URL", base["solr"].search_url),
            field_spec=os.getenv("SOLR_FIELD_SPEC", base["solr"].field_spec),
            query_params=os.getenv("SOLR_QUERY_PARAMS", base["solr"].query_params),
            escape_query=escape,
            number_of_rows=rows,
        ),
        "es": EngineDefaults(
            search_url=os.getenv("ES_SEARCH_URL", base["es"].search_url),
            field_spec=os.getenv("ES_FIELD_SPEC", base["es"].field_spec),
            query_params=os.getenv("ES_QUERY_PARAMS", base["es"].query_params),
            escape_query=escape,
            number_of_rows=rows,
        ),
    }

    return AppConfig(
        default_search_engine=os.getenv("DEFAULT_SEARCH_ENGINE", "solr"),
        engines=engines,
        try_name_prefix=os.getenv("TRY_NAME_PREFIX", "Try"),
    )
