"""TryView construction and serialization for API consumers."""

from __future__ import annotations

from typing import Any, Mapping

from query_tries.models import Try, TryView


def to_view(try_: Try, curator_vars: Mapping[str, str] | None = None) -> TryView:
    return TryView(
        try_no=try_.try_no,
        name=try_.name,
        query_params=try_.query_params,
        field_spec=try_.field_spec,
        search_url=try_.search_url,
        escape_query=try_.escape_query,
        number_of_rows=try_.number_of_rows,
        search_engine=try_.search_engine,
        args=try_.args,
        curator_vars=dict(curator_vars or {}),
    )


def serialize_view(view: TryView) -> dict[str, Any]:
    """camelCase dict for JSON responses."""
    return view.model_dump(by_alias=True, mode="json")
