"""Try argument compiler: substitution followed by dialect materialization."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from query_tries.compiler.substitution import substitute, unresolved_variables
from query_tries.dialects import get_dialect
from query_tries.models import SearchEngine, Try

logger = logging.getLogger(__name__)


class TryArgumentCompiler:
    """Turn a try's template and curator variables into engine args.

    Compilation is pure: the same template, phrase, escape flag,
    variables and engine always produce the same result. Malformed
    templates yield None instead of raising.
    """

    def compile(
        self,
        template: str,
        search_engine: SearchEngine | str,
        variables: Mapping[str, str] | None = None,
        *,
        phrase: str | None = None,
        escape_query: bool = True,
    ) -> Any | None:
        dialect = get_dialect(search_engine)
        text = substitute(
            template,
            phrase=phrase,
            escape=dialect.escape if escape_query else None,
            variables=variables,
        )

        missing = unresolved_variables(template, variables)
        if missing:
            logger.debug("Unresolved curator variables left in template: %s", missing)

        args = dialect.materialize(text)
        if args is None:
            logger.info("Template did not parse as %s; args left empty", dialect.name)
        return args

    def compile_try(
        self,
        try_: Try,
        variables: Mapping[str, str] | None = None,
        phrase: str | None = None,
    ) -> Any | None:
        return self.compile(
            try_.query_params,
            try_.search_engine,
            variables,
            phrase=phrase,
            escape_query=try_.escape_query,
        )
