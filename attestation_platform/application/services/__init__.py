"""Application services."""

from attestation_platform.application.services.attestation_flow_service import (
    AttestationFlowService,
    AttestorAccount,
    FlowReport,
)
from attestation_platform.application.services.period_engine import PeriodEngine
from attestation_platform.application.services.proof_orchestrator import (
    PipelineOutcome,
    PipelineReport,
    ProofOrchestrator,
)
from attestation_platform.application.services.time_authority_service import (
    TimeAuthorityService,
)

__all__: list[str] = [
    "AttestationFlowService",
    "AttestorAccount",
    "FlowReport",
    "PeriodEngine",
    "PipelineOutcome",
    "PipelineReport",
    "ProofOrchestrator",
    "TimeAuthorityService",
]
