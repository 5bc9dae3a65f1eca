"""
Domain layer - Pure business logic for the attestation platform.

This layer contains:
- Domain models (Attestor, Attestation, VerificationResult, periods)
- Domain events (ledger signals)
- Domain errors

CRITICAL: This layer must NOT import from application, infrastructure, or api.
"""

from attestation_platform.domain.exceptions import AttestationPlatformError

__all__: list[str] = ["AttestationPlatformError"]
