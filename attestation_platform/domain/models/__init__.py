"""Domain models for attestors, attestations, periods and verification."""

from attestation_platform.domain.models.attestation import (
    Attestation,
    SubmissionChannel,
)
from attestation_platform.domain.models.attestor import Attestor
from attestation_platform.domain.models.constraints import (
    DEFAULT_MAX_PAYLOAD_BYTES,
    DEFAULT_MAX_PROOF_BYTES,
    normalize_identity,
    validate_blob,
    validate_label,
)
from attestation_platform.domain.models.period import (
    PeriodSnapshot,
    PeriodStatus,
    derive_period_status,
)
from attestation_platform.domain.models.relation import (
    describe_verdict,
    evaluate_relation,
)
from attestation_platform.domain.models.verification import (
    VerificationResult,
    VerificationRule,
)

__all__: list[str] = [
    "Attestation",
    "Attestor",
    "DEFAULT_MAX_PAYLOAD_BYTES",
    "DEFAULT_MAX_PROOF_BYTES",
    "PeriodSnapshot",
    "PeriodStatus",
    "SubmissionChannel",
    "VerificationResult",
    "VerificationRule",
    "derive_period_status",
    "describe_verdict",
    "evaluate_relation",
    "normalize_identity",
    "validate_blob",
    "validate_label",
]
