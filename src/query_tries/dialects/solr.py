"""Solr dialect: URL query-string templates."""

from __future__ import annotations

import logging
import re
from urllib.parse import quote, unquote_plus

from query_tries.dialects.base import Dialect

logger = logging.getLogger(__name__)

_BAD_PERCENT_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class SolrDialect(Dialect):
    """``key=value&key=value`` templates; repeated keys accumulate."""

    @property
    def name(self) -> str:
        return "solr"

    def escape(self, phrase: str) -> str:
        # Lone surrogates cannot be UTF-8 encoded
        return quote(phrase, safe="", errors="replace")

    def materialize(self, text: str) -> dict[str, list[str]]:
        args: dict[str, list[str]] = {}
        for segment in text.split("&"):
            segment = segment.strip()
            if not segment:
                continue
            key, sep, value = segment.partition("=")
            if not sep or not key:
                logger.debug("Dropping query-string segment without key: %r", segment)
                continue
            try:
                key = _decode(key)
                value = _decode(value)
            except ValueError:
                logger.debug("Dropping badly encoded query-string segment: %r", segment)
                continue
            args.setdefault(key, []).append(value)
        return args


def _decode(part: str) -> str:
    """Percent-decode one key or value, rejecting broken escapes."""
    if _BAD_PERCENT_RE.search(part):
        raise ValueError(f"Invalid percent-encoding in {part!r}")
    # UnicodeDecodeError is a ValueError
    return unquote_plus(part, errors="strict")
