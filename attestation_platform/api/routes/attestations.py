"""Attestation submission endpoints.

Attestations are always recorded against the current period. A direct
submission is made by the attestor named in X-Caller-Identity; an
on-behalf submission is made by the administrator for a registered
attestor.
"""

from fastapi import APIRouter, Depends, Request

from attestation_platform.api.dependencies.ledger import (
    get_caller_identity,
    get_period_engine,
)
from attestation_platform.api.errors import invalid_payload_http_error, ledger_http_error
from attestation_platform.api.models.ledger import (
    AttestationResponse,
    ProblemResponse,
    SubmitAttestationRequest,
    SubmitOnBehalfRequest,
)
from attestation_platform.application.services.period_engine import PeriodEngine
from attestation_platform.domain.errors import InvalidPayloadError, LedgerError

router = APIRouter(prefix="/v1/attestations", tags=["attestations"])

_SUBMISSION_RESPONSES: dict[int | str, dict[str, object]] = {
    403: {"model": ProblemResponse, "description": "Caller lacks the required role"},
    409: {"model": ProblemResponse, "description": "Already submitted this period"},
    422: {"model": ProblemResponse, "description": "Payload empty or oversized"},
}


@router.post(
    "",
    response_model=AttestationResponse,
    status_code=201,
    responses=_SUBMISSION_RESPONSES,
)
async def submit_attestation(
    request_data: SubmitAttestationRequest,
    request: Request,
    caller: str = Depends(get_caller_identity),
    engine: PeriodEngine = Depends(get_period_engine),
) -> AttestationResponse:
    try:
        attestation = engine.submit_attestation(caller, request_data.payload)
    except LedgerError as e:
        raise ledger_http_error(e, request) from None
    except InvalidPayloadError as e:
        raise invalid_payload_http_error(e, request) from None
    return AttestationResponse.from_domain(attestation)


@router.post(
    "/on-behalf",
    response_model=AttestationResponse,
    status_code=201,
    responses=_SUBMISSION_RESPONSES,
)
async def submit_attestation_on_behalf(
    request_data: SubmitOnBehalfRequest,
    request: Request,
    caller: str = Depends(get_caller_identity),
    engine: PeriodEngine = Depends(get_period_engine),
) -> AttestationResponse:
    """Submit for a registered attestor (administrator only)."""
    try:
        attestation = engine.submit_attestation_on_behalf(
            caller, request_data.address, request_data.payload
        )
    except LedgerError as e:
        raise ledger_http_error(e, request) from None
    except InvalidPayloadError as e:
        raise invalid_payload_http_error(e, request) from None
    return AttestationResponse.from_domain(attestation)
