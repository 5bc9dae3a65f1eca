"""Bootstrap wiring for the Period Engine and its in-memory collaborators."""

from __future__ import annotations

from dataclasses import dataclass

from attestation_platform.application.ports.time_authority import (
    TimeAuthorityProtocol,
)
from attestation_platform.application.services.period_engine import PeriodEngine
from attestation_platform.application.services.time_authority_service import (
    TimeAuthorityService,
)
from attestation_platform.config import LedgerConfig
from attestation_platform.infrastructure.stubs.event_bus_stub import InMemoryEventBus
from attestation_platform.infrastructure.stubs.ledger_state_stub import (
    InMemoryLedgerState,
)


@dataclass(frozen=True)
class LedgerRuntime:
    """The engine together with the store and bus it was built over."""

    engine: PeriodEngine
    state: InMemoryLedgerState
    events: InMemoryEventBus


def build_ledger_runtime(
    config: LedgerConfig,
    time_authority: TimeAuthorityProtocol | None = None,
) -> LedgerRuntime:
    """Build a PeriodEngine over a fresh in-memory ledger state and event bus."""
    state = InMemoryLedgerState(required_attestor_count=config.required_attestor_count)
    events = InMemoryEventBus()
    engine = PeriodEngine(
        state=state,
        events=events,
        time_authority=time_authority or TimeAuthorityService(),
        admin_identity=config.admin_identity,
        max_payload_bytes=config.max_payload_bytes,
        max_proof_bytes=config.max_proof_bytes,
    )
    return LedgerRuntime(engine=engine, state=state, events=events)


__all__ = ["LedgerRuntime", "build_ledger_runtime"]
