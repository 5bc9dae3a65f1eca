"""API request and response models."""

from attestation_platform.api.models.health import HealthResponse
from attestation_platform.api.models.ledger import (
    AddRuleRequest,
    AttestationResponse,
    AttestorResponse,
    LedgerSummaryResponse,
    PeriodAdvancedResponse,
    PeriodResponse,
    ProblemResponse,
    PublishResultRequest,
    RegisterAttestorRequest,
    RuleResponse,
    SubmitAttestationRequest,
    SubmitOnBehalfRequest,
    VerificationResultResponse,
)

__all__: list[str] = [
    "AddRuleRequest",
    "AttestationResponse",
    "AttestorResponse",
    "HealthResponse",
    "LedgerSummaryResponse",
    "PeriodAdvancedResponse",
    "PeriodResponse",
    "ProblemResponse",
    "PublishResultRequest",
    "RegisterAttestorRequest",
    "RuleResponse",
    "SubmitAttestationRequest",
    "SubmitOnBehalfRequest",
    "VerificationResultResponse",
]
