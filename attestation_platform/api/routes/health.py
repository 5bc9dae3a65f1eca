"""Health check endpoint."""

from fastapi import APIRouter, Depends

from attestation_platform.api.dependencies.ledger import get_period_engine
from attestation_platform.api.models.health import HealthResponse
from attestation_platform.application.services.period_engine import PeriodEngine

router = APIRouter(prefix="/v1", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    engine: PeriodEngine = Depends(get_period_engine),
) -> HealthResponse:
    """Return health status with the current period id."""
    return HealthResponse(status="healthy", current_period_id=engine.current_period_id)
