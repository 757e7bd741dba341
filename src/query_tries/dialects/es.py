"""Elasticsearch dialect: JSON request body templates."""

from __future__ import annotations

import json
import logging
from typing import Any

from query_tries.dialects.base import Dialect

logger = logging.getLogger(__name__)


class ElasticsearchDialect(Dialect):
    """Templates are a single JSON document used as the request body.

    Any value that parses is returned as-is, including empty objects and
    other falsy values. Only a parse failure yields None.
    """

    @property
    def name(self) -> str:
        return "es"

    def escape(self, phrase: str) -> str:
        # The placeholder sits inside a JSON string literal; lone surrogates
        # would break encoding the request body
        phrase = phrase.encode("utf-8", "replace").decode("utf-8")
        return json.dumps(phrase, ensure_ascii=False)[1:-1]

    def materialize(self, text: str) -> Any | None:
        try:
            return json.loads(text)
        except (json.JSONDecodeError, ValueError) as exc:
            logger.info("Template is not valid JSON: %s", exc)
            return None
