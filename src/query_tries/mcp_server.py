"""MCP server for query tries.

Exposes the try lifecycle as MCP tools for LLM agent integration.
Requires the `mcp` optional dependency: pip install query-tries[mcp]
"""

from __future__ import annotations

import json
import logging
from typing import Any

from query_tries.config import load_config
from query_tries.exceptions import NotFoundError, TryError
from query_tries.lifecycle import TryLifecycleManager
from query_tries.views import serialize_view

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Manager infrastructure
# ---------------------------------------------------------------------------

_manager: TryLifecycleManager | None = None


def _get_manager() -> TryLifecycleManager:
    global _manager
    if _manager is None:
        _manager = TryLifecycleManager.from_config(load_config())
    return _manager


def _error(exc: TryError) -> str:
    kind = "not_found" if isinstance(exc, NotFoundError) else "invalid"
    return json.dumps({"error": str(exc), "kind": kind})


def _dump(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


# ---------------------------------------------------------------------------
# MCP Tools
# ---------------------------------------------------------------------------

from mcp.server.fastmcp import FastMCP  # noqa: E402

mcp = FastMCP(
    "query-tries",
    instructions=(
        "Iterative search query tuning.\n"
        "\n"
        "A case holds numbered tries. Each try stores a query template for a\n"
        "search engine ('solr' query string or 'es' JSON body) and curator\n"
        "variables substituted into {name} placeholders. #$query## marks\n"
        "where the user's search phrase goes.\n"
        "\n"
        "FLOW:\n"
        "1. create_case(name) -> case_id\n"
        "2. create_try(case_id, fields) -> try with compiled args\n"
        "3. set_curator_variable / preview_args to tune\n"
        "4. rename_try or delete_try as needed; query fields are fixed after creation\n"
    ),
)


@mcp.tool()
async def create_case(name: str) -> str:
    """Create an empty case and return its id."""
    case = await _get_manager().repository.create_case(name)
    return _dump(case.model_dump(mode="json"))


@mcp.tool()
async def list_tries(case_id: int) -> str:
    """List all tries of a case in try number order."""
    try:
        views = await _get_manager().list_tries(case_id)
    except TryError as exc:
        return _error(exc)
    return _dump({"tries": [serialize_view(v) for v in views]})


@mcp.tool()
async def get_try(case_id: int, try_no: int) -> str:
    """Fetch one try by its number within the case."""
    try:
        view = await _get_manager().get_try(case_id, try_no)
    except TryError as exc:
        return _error(exc)
    return _dump(serialize_view(view))


@mcp.tool()
async def create_try(case_id: int, fields: dict[str, Any] | None = None) -> str:
    """Create a new try in a case.

    Args:
        case_id: Case to add the try to
        fields: Optional camelCase fields - name, searchEngine ("solr" or "es"),
            searchUrl, fieldSpec, queryParams, escapeQuery, numberOfRows,
            curatorVars (mapping). Omitted fields take engine defaults.
    """
    try:
        view = await _get_manager().create_try(case_id, fields)
    except TryError as exc:
        return _error(exc)
    return _dump(serialize_view(view))


@mcp.tool()
async def rename_try(case_id: int, try_no: int, name: str) -> str:
    """Rename a try. Name is the only field that can change after creation."""
    try:
        view = await _get_manager().rename_try(case_id, try_no, name)
    except TryError as exc:
        return _error(exc)
    return _dump(serialize_view(view))


@mcp.tool()
async def delete_try(case_id: int, try_no: int) -> str:
    """Delete a try together with its curator variables."""
    try:
        await _get_manager().delete_try(case_id, try_no)
    except TryError as exc:
        return _error(exc)
    return _dump({"deleted": True, "case_id": case_id, "try_no": try_no})


@mcp.tool()
async def set_curator_variable(case_id: int, try_no: int, name: str, value: str) -> str:
    """Set a curator variable on a try and recompile its args."""
    try:
        view = await _get_manager().set_curator_variable(case_id, try_no, name, value)
    except TryError as exc:
        return _error(exc)
    return _dump(serialize_view(view))


@mcp.tool()
async def preview_args(case_id: int, try_no: int, phrase: str) -> str:
    """Show the args a try would send for a given search phrase."""
    try:
        args, request = await _get_manager().preview(case_id, try_no, phrase)
    except TryError as exc:
        return _error(exc)
    payload: dict[str, Any] = {"args": args}
    if request is not None:
        payload["request"] = {"method": request.method, "url": str(request.url)}
    return _dump(payload)


def main() -> None:
    """Entry point for the MCP server."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
