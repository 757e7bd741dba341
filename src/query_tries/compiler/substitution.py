"""Template substitution: resolve curator variables and the query phrase."""

from __future__ import annotations

import re
from typing import Callable, Mapping

from query_tries.config import QUERY_PLACEHOLDER

_VARIABLE_RE = re.compile(r"\{(\w+)\}")


def substitute(
    template: str,
    *,
    phrase: str | None = None,
    escape: Callable[[str], str] | None = None,
    variables: Mapping[str, str] | None = None,
) -> str:
    """Resolve placeholders in a raw try template.

    ``{name}`` placeholders are replaced by curator variable values in a
    single pass; names with no matching variable stay in the output
    verbatim. The ``#$query##`` placeholder is replaced by ``phrase``
    (passed through ``escape`` first, if given). When ``phrase`` is None
    the query placeholder is kept so it can be bound per search.
    """
    text = template or ""

    if variables:
        def _lookup(match: re.Match[str]) -> str:
            value = variables.get(match.group(1))
            return match.group(0) if value is None else str(value)

        text = _VARIABLE_RE.sub(_lookup, text)

    if phrase is not None:
        replacement = escape(phrase) if escape else phrase
        text = text.replace(QUERY_PLACEHOLDER, replacement)

    return text


def unresolved_variables(template: str, variables: Mapping[str, str] | None = None) -> list[str]:
    """Names of ``{name}`` placeholders that have no matching variable."""
    known = variables or {}
    seen: list[str] = []
    for name in _VARIABLE_RE.findall(template or ""):
        if name not in known and name not in seen:
            seen.append(name)
    return seen
