"""Ledger event types.

Events are signalled by the Period Engine after a mutating call succeeds.
Delivery to subscribers is at-least-once and not ordered across periods,
so consumers must be idempotent.

Event type constants follow the lowercase.dot.notation convention.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar

ATTESTOR_REGISTERED_EVENT_TYPE: str = "ledger.attestor.registered"
ATTESTATION_RECORDED_EVENT_TYPE: str = "ledger.attestation.recorded"
PERIOD_QUORUM_REACHED_EVENT_TYPE: str = "ledger.period.quorum_reached"
VERIFICATION_PUBLISHED_EVENT_TYPE: str = "ledger.verification.published"
VERIFICATION_RULE_ADDED_EVENT_TYPE: str = "ledger.rule.added"
PERIOD_ADVANCED_EVENT_TYPE: str = "ledger.period.advanced"


@dataclass(frozen=True, eq=True)
class AttestorRegisteredEvent:
    """An attestor identity was added to the registry."""

    event_type: ClassVar[str] = ATTESTOR_REGISTERED_EVENT_TYPE

    address: str
    name: str
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "name": self.name,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True, eq=True)
class AttestationRecordedEvent:
    """An attestation was recorded for (period_id, attestor)."""

    event_type: ClassVar[str] = ATTESTATION_RECORDED_EVENT_TYPE

    period_id: int
    attestor: str
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "period_id": self.period_id,
            "attestor": self.attestor,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True, eq=True)
class PeriodQuorumReachedEvent:
    """The distinct-attestor count of a period crossed the quorum threshold.

    Edge-triggered: signalled exactly once per period, by the submission
    that moves the count from required - 1 to required.
    """

    event_type: ClassVar[str] = PERIOD_QUORUM_REACHED_EVENT_TYPE

    period_id: int
    attestor_count: int

    def to_dict(self) -> dict[str, Any]:
        return {"period_id": self.period_id, "attestor_count": self.attestor_count}


@dataclass(frozen=True, eq=True)
class VerificationPublishedEvent:
    """A verification result was recorded for a period."""

    event_type: ClassVar[str] = VERIFICATION_PUBLISHED_EVENT_TYPE

    period_id: int
    passed: bool
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "period_id": self.period_id,
            "passed": self.passed,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True, eq=True)
class VerificationRuleAddedEvent:
    """A verification rule was appended at ``index``."""

    event_type: ClassVar[str] = VERIFICATION_RULE_ADDED_EVENT_TYPE

    index: int
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {"index": self.index, "description": self.description}


@dataclass(frozen=True, eq=True)
class PeriodAdvancedEvent:
    """The current period pointer moved from ``previous_period_id``.

    Attributes:
        forced: True when an administrator abandoned the period, False when
            the advance followed a published result.
    """

    event_type: ClassVar[str] = PERIOD_ADVANCED_EVENT_TYPE

    previous_period_id: int
    current_period_id: int
    forced: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "previous_period_id": self.previous_period_id,
            "current_period_id": self.current_period_id,
            "forced": self.forced,
        }


LedgerEvent = (
    AttestorRegisteredEvent
    | AttestationRecordedEvent
    | PeriodQuorumReachedEvent
    | VerificationPublishedEvent
    | VerificationRuleAddedEvent
    | PeriodAdvancedEvent
)
