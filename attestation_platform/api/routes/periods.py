"""Period endpoints: snapshots, attestation lookup, result publication, rollover."""

from fastapi import APIRouter, Depends, HTTPException, Request

from attestation_platform.api.dependencies.ledger import (
    get_caller_identity,
    get_period_engine,
)
from attestation_platform.api.errors import invalid_payload_http_error, ledger_http_error
from attestation_platform.api.models.ledger import (
    AttestationResponse,
    PeriodAdvancedResponse,
    PeriodResponse,
    ProblemResponse,
    PublishResultRequest,
    VerificationResultResponse,
)
from attestation_platform.application.services.period_engine import PeriodEngine
from attestation_platform.domain.errors import InvalidPayloadError, LedgerError

router = APIRouter(prefix="/v1/periods", tags=["periods"])


@router.get("/current", response_model=PeriodResponse)
async def get_current_period(
    engine: PeriodEngine = Depends(get_period_engine),
) -> PeriodResponse:
    return PeriodResponse.from_domain(engine.period_snapshot(engine.current_period_id))


@router.post(
    "/advance",
    response_model=PeriodAdvancedResponse,
    responses={403: {"model": ProblemResponse}},
)
async def force_advance_period(
    request: Request,
    caller: str = Depends(get_caller_identity),
    engine: PeriodEngine = Depends(get_period_engine),
) -> PeriodAdvancedResponse:
    """Abandon the current period and open the next (administrator only)."""
    previous = engine.current_period_id
    try:
        current = engine.force_advance_period(caller)
    except LedgerError as e:
        raise ledger_http_error(e, request) from None
    return PeriodAdvancedResponse(previous_period_id=previous, current_period_id=current)


@router.get("/{period_id}", response_model=PeriodResponse)
async def get_period(
    period_id: int,
    engine: PeriodEngine = Depends(get_period_engine),
) -> PeriodResponse:
    """Snapshot of any period id; periods never written to read as empty."""
    if period_id < 0:
        raise HTTPException(status_code=404, detail="period ids start at 0")
    return PeriodResponse.from_domain(engine.period_snapshot(period_id))


@router.get(
    "/{period_id}/attestations/{address}",
    response_model=AttestationResponse,
    responses={404: {"description": "No attestation for this pair"}},
)
async def get_attestation(
    period_id: int,
    address: str,
    engine: PeriodEngine = Depends(get_period_engine),
) -> AttestationResponse:
    attestation = engine.get_attestation(period_id, address)
    if attestation is None:
        raise HTTPException(
            status_code=404,
            detail=f"No attestation from {address} for period {period_id}",
        )
    return AttestationResponse.from_domain(attestation)


@router.post(
    "/{period_id}/result",
    response_model=VerificationResultResponse,
    status_code=201,
    responses={
        403: {"model": ProblemResponse, "description": "Caller is not the administrator"},
        409: {"model": ProblemResponse, "description": "Not complete or already published"},
        422: {"model": ProblemResponse, "description": "Proof empty or oversized"},
    },
)
async def publish_verification_result(
    period_id: int,
    request_data: PublishResultRequest,
    request: Request,
    caller: str = Depends(get_caller_identity),
    engine: PeriodEngine = Depends(get_period_engine),
) -> VerificationResultResponse:
    try:
        result = engine.publish_verification_result(
            caller, period_id, request_data.passed, request_data.proof_data
        )
    except LedgerError as e:
        raise ledger_http_error(e, request) from None
    except InvalidPayloadError as e:
        raise invalid_payload_http_error(e, request) from None
    return VerificationResultResponse.from_domain(result)
