"""Attestor registry endpoints.

Registration is restricted to the administrator. Lookups of unknown
identities are answered with ``registered: false``, never with an error.
"""

from fastapi import APIRouter, Depends, Request

from attestation_platform.api.dependencies.ledger import (
    get_caller_identity,
    get_period_engine,
)
from attestation_platform.api.errors import invalid_payload_http_error, ledger_http_error
from attestation_platform.api.models.ledger import (
    AttestorResponse,
    ProblemResponse,
    RegisterAttestorRequest,
)
from attestation_platform.application.services.period_engine import PeriodEngine
from attestation_platform.domain.errors import InvalidPayloadError, LedgerError

router = APIRouter(prefix="/v1/attestors", tags=["attestors"])


@router.get("", response_model=list[AttestorResponse])
async def list_attestors(
    engine: PeriodEngine = Depends(get_period_engine),
) -> list[AttestorResponse]:
    """List registered attestors in registration order."""
    return [AttestorResponse.from_domain(a) for a in engine.list_attestors()]


@router.get("/{address}", response_model=AttestorResponse)
async def get_attestor(
    address: str,
    engine: PeriodEngine = Depends(get_period_engine),
) -> AttestorResponse:
    attestor = engine.get_attestor(address)
    if attestor is None:
        return AttestorResponse(address=address.strip().lower(), registered=False)
    return AttestorResponse.from_domain(attestor)


@router.post(
    "",
    response_model=AttestorResponse,
    status_code=201,
    responses={
        403: {"model": ProblemResponse, "description": "Caller is not the administrator"},
        409: {"model": ProblemResponse, "description": "Identity already registered"},
        422: {"model": ProblemResponse, "description": "Empty identity or name"},
    },
)
async def register_attestor(
    request_data: RegisterAttestorRequest,
    request: Request,
    caller: str = Depends(get_caller_identity),
    engine: PeriodEngine = Depends(get_period_engine),
) -> AttestorResponse:
    """Register an attestor (administrator only)."""
    try:
        attestor = engine.register_attestor(caller, request_data.address, request_data.name)
    except LedgerError as e:
        raise ledger_http_error(e, request) from None
    except InvalidPayloadError as e:
        raise invalid_payload_http_error(e, request) from None
    return AttestorResponse.from_domain(attestor)
