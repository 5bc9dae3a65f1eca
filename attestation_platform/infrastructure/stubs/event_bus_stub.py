"""In-memory event bus implementing EventPublisherProtocol.

Publishing appends the event to a bounded history and fans it out to every
subscriber queue without blocking. Subscribers consume at their own pace.
Only the most recent history_limit events are kept.

Usage:
    bus = InMemoryEventBus()
    queue = bus.subscribe()
    engine = PeriodEngine(state=..., events=bus, ...)
    event = await queue.get()
"""

from __future__ import annotations

import asyncio
from collections import deque
from typing import TYPE_CHECKING

from structlog import get_logger

if TYPE_CHECKING:
    from attestation_platform.domain.events import LedgerEvent

logger = get_logger(__name__)

DEFAULT_HISTORY_LIMIT = 1000


class InMemoryEventBus:
    """Fan-out event bus backed by asyncio queues."""

    def __init__(self, history_limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        if history_limit < 1:
            raise ValueError(f"history_limit must be positive, got {history_limit}")
        self._history: deque[LedgerEvent] = deque(maxlen=history_limit)
        self._subscribers: list[asyncio.Queue[LedgerEvent]] = []

    @property
    def history(self) -> list[LedgerEvent]:
        """Most recent published events, oldest first."""
        return list(self._history)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def events_of(self, event_cls: type) -> list[LedgerEvent]:
        return [event for event in self._history if isinstance(event, event_cls)]

    def subscribe(self) -> asyncio.Queue[LedgerEvent]:
        """Register a new subscriber and return its queue."""
        queue: asyncio.Queue[LedgerEvent] = asyncio.Queue()
        self._subscribers.append(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue[LedgerEvent]) -> None:
        if queue in self._subscribers:
            self._subscribers.remove(queue)

    def publish(self, event: LedgerEvent) -> None:
        self._history.append(event)
        logger.debug("ledger_event_published", event_type=event.event_type, **event.to_dict())
        for queue in self._subscribers:
            queue.put_nowait(event)

    def redeliver(self, event: LedgerEvent) -> None:
        """Deliver an event again without recording it (at-least-once delivery)."""
        for queue in self._subscribers:
            queue.put_nowait(event)

    def clear(self) -> None:
        """Clear history (for test cleanup)."""
        self._history.clear()
