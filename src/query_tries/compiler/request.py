"""Build the HTTP request a try's args describe, without sending it."""

from __future__ import annotations

from typing import Any

import httpx

from query_tries.models import SearchEngine, Try


def build_search_request(try_: Try, args: Any | None) -> httpx.Request | None:
    """Shape compiled args into an ``httpx.Request`` for the try's engine.

    Solr args become GET query parameters with ``rows`` filled from the
    try when the template does not set it. Elasticsearch args become the
    POST body with ``size`` filled the same way. Returns None when the
    args are absent.
    """
    if args is None:
        return None

    if try_.search_engine == SearchEngine.SOLR:
        params: list[tuple[str, str]] = [
            (key, value) for key, values in args.items() for value in values
        ]
        if "rows" not in args:
            params.append(("rows", str(try_.number_of_rows)))
        return httpx.Request("GET", try_.search_url, params=params)

    body = args
    if isinstance(body, dict) and "size" not in body:
        body = {**body, "size": try_.number_of_rows}
    return httpx.Request("POST", try_.search_url, json=body)
