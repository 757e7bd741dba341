"""Core data models for query tries.

All Pydantic models are defined here as the single source of truth.
Every other module imports from this file.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class SearchEngine(str, Enum):
    SOLR = "solr"
    ES = "es"


# ---------------------------------------------------------------------------
# Stored entities
# ---------------------------------------------------------------------------

class Case(BaseModel):
    id: int
    name: str
    last_try: int = 0


class CuratorVariable(BaseModel):
    name: str
    value: str


class Try(BaseModel):
    case_id: int
    try_no: int
    name: str
    search_engine: SearchEngine
    search_url: str
    field_spec: str
    query_params: str
    escape_query: bool = True
    number_of_rows: int = 10
    args: Any = None


# ---------------------------------------------------------------------------
# Lifecycle input / output
# ---------------------------------------------------------------------------

class TryFields(BaseModel):
    """Partial field set submitted for create or update.

    Accepts both the camelCase keys used by API clients and snake_case
    keys. Unknown keys are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    name: str | None = None
    search_engine: SearchEngine | None = None
    search_url: str | None = None
    field_spec: str | None = None
    query_params: str | None = None
    escape_query: bool | None = None
    number_of_rows: int | None = Field(default=None, ge=0)
    curator_vars: dict[str, str] = {}

    @field_validator("curator_vars", mode="before")
    @classmethod
    def _stringify_values(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            return {str(k): str(v) for k, v in value.items()}
        return value


class TryView(BaseModel):
    """Normalized try representation handed back to callers."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    try_no: int
    name: str
    query_params: str
    field_spec: str
    search_url: str
    escape_query: bool
    number_of_rows: int
    search_engine: SearchEngine
    args: Any = None
    curator_vars: dict[str, str] = {}


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

class TryCreatedEvent(BaseModel):
    case_id: int
    try_no: int
    search_engine: SearchEngine
    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
