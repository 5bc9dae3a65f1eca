"""Ledger summary endpoint."""

from fastapi import APIRouter, Depends

from attestation_platform.api.dependencies.ledger import get_period_engine
from attestation_platform.api.models.ledger import LedgerSummaryResponse
from attestation_platform.application.services.period_engine import PeriodEngine

router = APIRouter(prefix="/v1", tags=["ledger"])


@router.get("/ledger", response_model=LedgerSummaryResponse)
async def get_ledger_summary(
    engine: PeriodEngine = Depends(get_period_engine),
) -> LedgerSummaryResponse:
    return LedgerSummaryResponse(
        admin_identity=engine.admin_identity,
        current_period_id=engine.current_period_id,
        required_attestor_count=engine.required_attestor_count,
        attestor_count=engine.attestor_count(),
        rule_count=engine.rule_count(),
    )
