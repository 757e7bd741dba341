"""Analytics event sink boundary."""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from query_tries.models import TryCreatedEvent

logger = logging.getLogger(__name__)


@runtime_checkable
class EventSink(Protocol):
    async def emit(self, event: TryCreatedEvent) -> None: ...


class LoggingEventSink:
    """Default sink: records events in the log only."""

    async def emit(self, event: TryCreatedEvent) -> None:
        logger.info(
            "try_created case=%s try=%s engine=%s",
            event.case_id,
            event.try_no,
            event.search_engine.value,
        )
