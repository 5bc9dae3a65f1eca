"""AttestationLedger protocol - the Ledger API as seen by off-chain actors.

The proof orchestrator and the attestor-side flow talk to the ledger
through this asynchronous interface. Each mutating call is atomic: it is
either fully applied or rejected with one of the LedgerError subclasses.
Read calls are pure and return None/0/empty for absent values.

Privileged calls are issued as the operator identity the implementation
was configured with.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from attestation_platform.domain.models import (
        Attestation,
        Attestor,
        VerificationResult,
    )


class AttestationLedgerProtocol(Protocol):
    """Protocol for reading and writing the attestation ledger."""

    @property
    def operator(self) -> str:
        """Identity used for privileged calls."""
        ...

    async def current_period_id(self) -> int:
        ...

    async def required_attestor_count(self) -> int:
        ...

    async def list_attestors(self) -> list[Attestor]:
        """Return registered attestors in registration order."""
        ...

    async def period_attestors(self, period_id: int) -> list[str]:
        """Return identities that submitted for the period, in order."""
        ...

    async def period_attestor_count(self, period_id: int) -> int:
        ...

    async def get_attestation(self, period_id: int, address: str) -> Attestation | None:
        ...

    async def get_verification_result(self, period_id: int) -> VerificationResult | None:
        ...

    async def register_attestor(self, address: str, name: str) -> Attestor:
        """Register an attestor (privileged)."""
        ...

    async def submit_attestation(self, address: str, payload: bytes) -> Attestation:
        """Submit as the attestor itself."""
        ...

    async def submit_attestation_on_behalf(
        self, address: str, payload: bytes
    ) -> Attestation:
        """Submit for an attestor as the operator (privileged)."""
        ...

    async def publish_verification_result(
        self, period_id: int, passed: bool, proof_data: bytes
    ) -> VerificationResult:
        """Publish a verification result (privileged)."""
        ...
