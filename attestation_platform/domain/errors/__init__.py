"""Domain errors for the attestation platform.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from AttestationPlatformError.
"""

from attestation_platform.domain.errors.ledger import (
    AlreadyRegisteredError,
    DuplicateSubmissionError,
    LedgerError,
    PeriodNotCompleteError,
    ResultAlreadyPublishedError,
    UnauthorizedError,
)
from attestation_platform.domain.errors.orchestration import (
    ArtifactMissingError,
    EncryptionFailedError,
    OrchestrationError,
    ProvingFailedError,
    ProvingTimeoutError,
)
from attestation_platform.domain.errors.validation import InvalidPayloadError

__all__: list[str] = [
    "AlreadyRegisteredError",
    "ArtifactMissingError",
    "DuplicateSubmissionError",
    "EncryptionFailedError",
    "InvalidPayloadError",
    "LedgerError",
    "OrchestrationError",
    "PeriodNotCompleteError",
    "ProvingFailedError",
    "ProvingTimeoutError",
    "ResultAlreadyPublishedError",
    "UnauthorizedError",
]
