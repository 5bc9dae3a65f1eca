"""Verification rule endpoints. The list is append-only."""

from fastapi import APIRouter, Depends, HTTPException, Request

from attestation_platform.api.dependencies.ledger import (
    get_caller_identity,
    get_period_engine,
)
from attestation_platform.api.errors import invalid_payload_http_error, ledger_http_error
from attestation_platform.api.models.ledger import (
    AddRuleRequest,
    ProblemResponse,
    RuleResponse,
)
from attestation_platform.application.services.period_engine import PeriodEngine
from attestation_platform.domain.errors import InvalidPayloadError, LedgerError

router = APIRouter(prefix="/v1/rules", tags=["rules"])


@router.get("", response_model=list[RuleResponse])
async def list_rules(
    engine: PeriodEngine = Depends(get_period_engine),
) -> list[RuleResponse]:
    return [RuleResponse.from_domain(rule) for rule in engine.list_rules()]


@router.get("/{index}", response_model=RuleResponse)
async def get_rule(
    index: int,
    engine: PeriodEngine = Depends(get_period_engine),
) -> RuleResponse:
    rule = engine.get_rule(index)
    if rule is None:
        raise HTTPException(status_code=404, detail=f"No rule at index {index}")
    return RuleResponse.from_domain(rule)


@router.post(
    "",
    response_model=RuleResponse,
    status_code=201,
    responses={
        403: {"model": ProblemResponse, "description": "Caller is not the administrator"},
        422: {"model": ProblemResponse, "description": "Empty description or rule data"},
    },
)
async def add_rule(
    request_data: AddRuleRequest,
    request: Request,
    caller: str = Depends(get_caller_identity),
    engine: PeriodEngine = Depends(get_period_engine),
) -> RuleResponse:
    try:
        rule = engine.add_verification_rule(
            caller, request_data.description, request_data.rule_data
        )
    except LedgerError as e:
        raise ledger_http_error(e, request) from None
    except InvalidPayloadError as e:
        raise invalid_payload_http_error(e, request) from None
    return RuleResponse.from_domain(rule)
