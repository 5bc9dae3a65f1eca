"""In-process adapter from the PeriodEngine to AttestationLedgerProtocol.

Lets the proof orchestrator and the attestor flow run in the same process
as the engine (development, demos, integration tests). Each call delegates
to one synchronous engine method, so atomicity is inherited unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from attestation_platform.domain.models import normalize_identity

if TYPE_CHECKING:
    from attestation_platform.application.services.period_engine import PeriodEngine
    from attestation_platform.domain.models import (
        Attestation,
        Attestor,
        VerificationResult,
    )


class InProcessLedger:
    """Async ledger facade over a PeriodEngine.

    Privileged calls are issued as ``operator``, which defaults to the
    engine's administrator.
    """

    def __init__(self, engine: PeriodEngine, operator: str | None = None) -> None:
        self._engine = engine
        self._operator = normalize_identity(
            operator if operator is not None else engine.admin_identity, "operator"
        )

    @property
    def engine(self) -> PeriodEngine:
        return self._engine

    @property
    def operator(self) -> str:
        return self._operator

    async def current_period_id(self) -> int:
        return self._engine.current_period_id

    async def required_attestor_count(self) -> int:
        return self._engine.required_attestor_count

    async def list_attestors(self) -> list[Attestor]:
        return self._engine.list_attestors()

    async def period_attestors(self, period_id: int) -> list[str]:
        return self._engine.period_attestors(period_id)

    async def period_attestor_count(self, period_id: int) -> int:
        return self._engine.period_attestor_count(period_id)

    async def get_attestation(self, period_id: int, address: str) -> Attestation | None:
        return self._engine.get_attestation(period_id, address)

    async def get_verification_result(self, period_id: int) -> VerificationResult | None:
        return self._engine.get_verification_result(period_id)

    async def register_attestor(self, address: str, name: str) -> Attestor:
        return self._engine.register_attestor(self._operator, address, name)

    async def submit_attestation(self, address: str, payload: bytes) -> Attestation:
        return self._engine.submit_attestation(address, payload)

    async def submit_attestation_on_behalf(
        self, address: str, payload: bytes
    ) -> Attestation:
        return self._engine.submit_attestation_on_behalf(self._operator, address, payload)

    async def publish_verification_result(
        self, period_id: int, passed: bool, proof_data: bytes
    ) -> VerificationResult:
        return self._engine.publish_verification_result(
            self._operator, period_id, passed, proof_data
        )
