"""Input validation errors for opaque blobs and labels."""

from __future__ import annotations

from attestation_platform.domain.exceptions import AttestationPlatformError


class InvalidPayloadError(AttestationPlatformError, ValueError):
    """Raised when a payload, proof, name or rule is empty or oversized.

    Attributes:
        field: Name of the offending field.
    """

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"{field}: {message}")
