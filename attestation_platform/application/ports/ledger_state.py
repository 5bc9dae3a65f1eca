"""LedgerState protocol - storage behind the Period Engine.

The ledger state is the append-only, consensus-ordered store holding the
attestor registry, per-period attestation sets, the rule list and
per-period verification results. The Period Engine assumes each mutating
call it makes is applied in a total order, so the protocol is synchronous
and exposes no locking.

Implementations must guarantee:
1. Registry order is preserved for enumeration
2. Per-period attestor order is submission order
3. Nothing is ever deleted or overwritten
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from attestation_platform.domain.models import (
        Attestation,
        Attestor,
        VerificationResult,
        VerificationRule,
    )


class LedgerStateProtocol(Protocol):
    """Protocol for the ledger store consumed by the Period Engine."""

    @property
    def required_attestor_count(self) -> int:
        """Quorum threshold fixed at initialization."""
        ...

    @property
    def current_period_id(self) -> int:
        """Current period pointer."""
        ...

    def advance_period(self) -> int:
        """Increment the current period pointer and return the new value."""
        ...

    def get_attestor(self, address: str) -> Attestor | None:
        ...

    def add_attestor(self, attestor: Attestor) -> None:
        """Append an attestor to the registry."""
        ...

    def list_attestors(self) -> list[Attestor]:
        """Return attestors in registration order."""
        ...

    def get_attestation(self, period_id: int, address: str) -> Attestation | None:
        ...

    def add_attestation(self, attestation: Attestation) -> int:
        """Record an attestation and append its attestor to the period list.

        Returns:
            The distinct-attestor count of the period after the append.
        """
        ...

    def list_period_attestors(self, period_id: int) -> list[str]:
        """Return the period's attestor identities in submission order."""
        ...

    def mark_quorum_signalled(self, period_id: int) -> bool:
        """Record that the quorum signal fired for a period.

        Returns:
            True if this call set the mark, False if it was already set.
        """
        ...

    def get_result(self, period_id: int) -> VerificationResult | None:
        ...

    def put_result(self, result: VerificationResult) -> None:
        ...

    def append_rule(self, rule: VerificationRule) -> None:
        ...

    def list_rules(self) -> list[VerificationRule]:
        ...
