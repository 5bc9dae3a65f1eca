"""Period read model.

Periods are implicit: they are identified by a monotonically increasing
integer and hold the attestations submitted against them plus, once
published, their verification result. The snapshot below is derived on
demand for queries and never stored.

State machine for a single period:

    OPEN -> QUORUM_REACHED -> VERIFIED
    OPEN -> ABANDONED            (pointer moved past it without quorum)

QUORUM_REACHED is an attribute (count >= threshold), not a gate: late
submissions are still accepted by identity. VERIFIED is terminal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from attestation_platform.domain.models.verification import VerificationResult


class PeriodStatus(Enum):
    """Lifecycle status of a period."""

    OPEN = "open"
    QUORUM_REACHED = "quorum_reached"
    VERIFIED = "verified"
    ABANDONED = "abandoned"


def derive_period_status(
    period_id: int,
    current_period_id: int,
    attestor_count: int,
    required_count: int,
    has_result: bool,
) -> PeriodStatus:
    """Derive the status of a period from ledger facts.

    A period behind the current pointer that reached quorum but has no
    result stays QUORUM_REACHED so that backlog reconciliation picks it up.
    """
    if has_result:
        return PeriodStatus.VERIFIED
    if attestor_count >= required_count:
        return PeriodStatus.QUORUM_REACHED
    if period_id < current_period_id:
        return PeriodStatus.ABANDONED
    return PeriodStatus.OPEN


@dataclass(frozen=True)
class PeriodSnapshot:
    """Point-in-time view of one period.

    Attributes:
        period_id: The period id.
        status: Derived lifecycle status.
        attestor_count: Distinct attestors that submitted.
        required_count: Quorum threshold.
        attestors: Submitting identities in submission order.
        result: Published result, if any.
    """

    period_id: int
    status: PeriodStatus
    attestor_count: int
    required_count: int
    attestors: tuple[str, ...] = field(default_factory=tuple)
    result: VerificationResult | None = None

    @property
    def is_complete(self) -> bool:
        return self.attestor_count >= self.required_count

    def to_dict(self) -> dict[str, Any]:
        return {
            "period_id": self.period_id,
            "status": self.status.value,
            "attestor_count": self.attestor_count,
            "required_count": self.required_count,
            "attestors": list(self.attestors),
            "result": self.result.to_dict() if self.result is not None else None,
        }
