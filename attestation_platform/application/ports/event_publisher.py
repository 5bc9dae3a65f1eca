"""Port definition for ledger event publication.

The Period Engine PUBLISHES events. The proof worker SUBSCRIBES
independently; the engine neither waits for nor depends on subscribers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from attestation_platform.domain.events import LedgerEvent


class EventPublisherProtocol(Protocol):
    """Protocol for publishing ledger events.

    Publishing is synchronous and non-blocking from the engine's point of
    view. Delivery to subscribers is at-least-once.
    """

    def publish(self, event: LedgerEvent) -> None:
        """Publish an event to all subscribers."""
        ...
