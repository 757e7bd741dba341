"""Try lifecycle orchestrator."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Mapping

import httpx
from pydantic import ValidationError

from query_tries.compiler import TryArgumentCompiler, build_search_request
from query_tries.config import AppConfig
from query_tries.events import EventSink, LoggingEventSink
from query_tries.exceptions import (
    CaseNotFoundError,
    InvalidTryFieldsError,
    TryNotFoundError,
    UnknownSearchEngineError,
)
from query_tries.lifecycle.sequencer import TrySequencer
from query_tries.models import (
    Case,
    SearchEngine,
    Try,
    TryCreatedEvent,
    TryFields,
    TryView,
)
from query_tries.store.base import TryRepository
from query_tries.variables import CuratorVariableStore
from query_tries.views import to_view

logger = logging.getLogger(__name__)

FieldsInput = TryFields | Mapping[str, Any] | None


class TryLifecycleManager:
    """Create, rename, fetch and delete tries within a case.

    Owns the rules for which fields may change in each operation and
    recompiles a try's ``args`` whenever its template, escape flag,
    engine or curator variables change. ``try_no`` and the query fields
    are fixed once a try is created; only ``name`` can be updated.
    """

    def __init__(
        self,
        repository: TryRepository,
        compiler: TryArgumentCompiler | None = None,
        event_sink: EventSink | None = None,
        config: AppConfig | None = None,
    ) -> None:
        self._repository = repository
        self._compiler = compiler or TryArgumentCompiler()
        self._event_sink = event_sink if event_sink is not None else LoggingEventSink()
        self._config = config or AppConfig()
        self._sequencer = TrySequencer(repository)
        self._pending_events: set[asyncio.Task[None]] = set()

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        repository: TryRepository | None = None,
        event_sink: EventSink | None = None,
    ) -> TryLifecycleManager:
        from query_tries.store.memory import InMemoryTryRepository

        return cls(
            repository=repository or InMemoryTryRepository(),
            event_sink=event_sink,
            config=config,
        )

    @property
    def repository(self) -> TryRepository:
        return self._repository

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def list_tries(self, case_id: int) -> list[TryView]:
        await self._require_case(case_id)
        views = []
        for try_ in await self._repository.list_tries(case_id):
            variables = await self._repository.get_curator_variables(case_id, try_.try_no)
            views.append(to_view(try_, variables))
        return views

    async def get_try(self, case_id: int, try_no: int) -> TryView:
        try_ = await self._require_try(case_id, try_no)
        variables = await self._repository.get_curator_variables(case_id, try_no)
        return to_view(try_, variables)

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    async def create_try(self, case_id: int, fields: FieldsInput = None) -> TryView:
        submitted = _coerce_fields(fields)
        await self._require_case(case_id)

        engine = submitted.search_engine or self._default_engine()
        defaults = self._config.defaults_for(engine.value)
        # Validate names before a try number is consumed
        variables = CuratorVariableStore(submitted.curator_vars)

        try_no = await self._sequencer.next_try_no(case_id)
        try_ = Try(
            case_id=case_id,
            try_no=try_no,
            name=submitted.name or f"{self._config.try_name_prefix} {try_no}",
            search_engine=engine,
            search_url=_pick(submitted.search_url, defaults.search_url),
            field_spec=_pick(submitted.field_spec, defaults.field_spec),
            query_params=_pick(submitted.query_params, defaults.query_params),
            escape_query=_pick(submitted.escape_query, defaults.escape_query),
            number_of_rows=_pick(submitted.number_of_rows, defaults.number_of_rows),
        )
        try_.args = self._compiler.compile_try(try_, variables.as_map())

        await self._repository.replace_curator_variables(case_id, try_no, variables.as_map())
        await self._repository.save_try(try_)
        logger.info(
            "Created try %s in case %s (%s, args %s)",
            try_no,
            case_id,
            engine.value,
            "absent" if try_.args is None else "compiled",
        )

        self._dispatch(
            TryCreatedEvent(case_id=case_id, try_no=try_no, search_engine=engine)
        )
        return to_view(try_, variables.as_map())

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    async def update_try(self, case_id: int, try_no: int, fields: FieldsInput) -> TryView:
        """Apply an update. Only ``name`` is honoured; the rest is ignored."""
        name, ignored = _split_update(fields)
        try_ = await self._require_try(case_id, try_no)

        if ignored:
            logger.debug("Ignoring immutable fields on try %s/%s: %s", case_id, try_no, sorted(ignored))

        if name is not None and name != try_.name:
            try_ = try_.model_copy(update={"name": name})
            await self._repository.save_try(try_)

        variables = await self._repository.get_curator_variables(case_id, try_no)
        return to_view(try_, variables)

    async def rename_try(self, case_id: int, try_no: int, name: str) -> TryView:
        return await self.update_try(case_id, try_no, TryFields(name=name))

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    async def delete_try(self, case_id: int, try_no: int) -> None:
        await self._require_case(case_id)
        if not await self._repository.delete_try(case_id, try_no):
            raise TryNotFoundError(case_id, try_no)
        logger.info("Deleted try %s from case %s", try_no, case_id)

    # ------------------------------------------------------------------
    # Curator variables
    # ------------------------------------------------------------------

    async def set_curator_variable(
        self, case_id: int, try_no: int, name: str, value: Any
    ) -> TryView:
        return await self._mutate_variables(
            case_id, try_no, lambda store: store.set(name, value)
        )

    async def remove_curator_variable(self, case_id: int, try_no: int, name: str) -> TryView:
        return await self._mutate_variables(
            case_id, try_no, lambda store: store.remove(name)
        )

    async def _mutate_variables(
        self,
        case_id: int,
        try_no: int,
        mutate: Callable[[CuratorVariableStore], object],
    ) -> TryView:
        try_ = await self._require_try(case_id, try_no)
        current = await self._repository.get_curator_variables(case_id, try_no)

        stale = False

        def _mark_stale() -> None:
            nonlocal stale
            stale = True

        store = CuratorVariableStore(current, on_change=_mark_stale)
        mutate(store)

        if stale:
            try_.args = self._compiler.compile_try(try_, store.as_map())
            await self._repository.replace_curator_variables(case_id, try_no, store.as_map())
            await self._repository.save_try(try_)
        return to_view(try_, store.as_map())

    # ------------------------------------------------------------------
    # Live phrase
    # ------------------------------------------------------------------

    async def preview_args(self, case_id: int, try_no: int, phrase: str) -> Any | None:
        """Compile the try with a live search phrase bound."""
        _, args = await self._compile_live(case_id, try_no, phrase)
        return args

    async def build_request(self, case_id: int, try_no: int, phrase: str) -> httpx.Request | None:
        _, request = await self.preview(case_id, try_no, phrase)
        return request

    async def preview(
        self, case_id: int, try_no: int, phrase: str
    ) -> tuple[Any | None, httpx.Request | None]:
        """Live args and the request they describe, from a single compile."""
        try_, args = await self._compile_live(case_id, try_no, phrase)
        return args, build_search_request(try_, args)

    async def _compile_live(self, case_id: int, try_no: int, phrase: str) -> tuple[Try, Any | None]:
        try_ = await self._require_try(case_id, try_no)
        variables = await self._repository.get_curator_variables(case_id, try_no)
        return try_, self._compiler.compile_try(try_, variables, phrase=phrase)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    async def wait_for_events(self) -> None:
        """Wait until every dispatched event has been handled."""
        if self._pending_events:
            await asyncio.gather(*list(self._pending_events))

    def _dispatch(self, event: TryCreatedEvent) -> None:
        task = asyncio.create_task(self._emit(event))
        self._pending_events.add(task)
        task.add_done_callback(self._pending_events.discard)

    async def _emit(self, event: TryCreatedEvent) -> None:
        try:
            await self._event_sink.emit(event)
        except Exception:
            logger.exception(
                "Event sink failed for try %s in case %s", event.try_no, event.case_id
            )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _default_engine(self) -> SearchEngine:
        try:
            return SearchEngine(self._config.default_search_engine)
        except ValueError:
            raise UnknownSearchEngineError(
                f"Unknown default search engine: {self._config.default_search_engine}"
            ) from None

    async def _require_case(self, case_id: int) -> Case:
        case = await self._repository.get_case(case_id)
        if case is None:
            raise CaseNotFoundError(case_id)
        return case

    async def _require_try(self, case_id: int, try_no: int) -> Try:
        await self._require_case(case_id)
        try_ = await self._repository.get_try(case_id, try_no)
        if try_ is None:
            raise TryNotFoundError(case_id, try_no)
        return try_


def _coerce_fields(fields: FieldsInput) -> TryFields:
    if fields is None:
        return TryFields()
    if isinstance(fields, TryFields):
        return fields
    try:
        return TryFields.model_validate(dict(fields))
    except ValidationError as exc:
        raise InvalidTryFieldsError(str(exc)) from exc


def _split_update(fields: FieldsInput) -> tuple[str | None, set[str]]:
    """Pull the new name out of an update; the other keys are never validated."""
    if fields is None:
        return None, set()
    if isinstance(fields, TryFields):
        return fields.name, fields.model_fields_set - {"name"}
    name = fields.get("name")
    if name is not None and not isinstance(name, str):
        raise InvalidTryFieldsError(f"Try name must be a string, got {type(name).__name__}")
    return name, set(fields) - {"name"}


def _pick(value: Any, default: Any) -> Any:
    return default if value is None else value
