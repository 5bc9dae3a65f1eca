"""Shared validation helpers for identities, labels and opaque blobs.

The platform never inspects payload or proof bytes. It only checks that
they are non-empty and within a size bound.
"""

from __future__ import annotations

from attestation_platform.domain.errors.validation import InvalidPayloadError

DEFAULT_MAX_PAYLOAD_BYTES: int = 64 * 1024
DEFAULT_MAX_PROOF_BYTES: int = 1024 * 1024


def normalize_identity(identity: str, field: str = "identity") -> str:
    """Return the canonical (stripped, lower-case) form of an identity.

    Raises:
        InvalidPayloadError: If the identity is empty or not a string.
    """
    if not isinstance(identity, str) or not identity.strip():
        raise InvalidPayloadError(field, "must be a non-empty string")
    return identity.strip().lower()


def validate_label(value: str, field: str) -> str:
    """Validate a human-readable label (attestor name, rule description)."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidPayloadError(field, "must be a non-empty string")
    return value


def validate_blob(data: bytes, field: str, max_bytes: int) -> bytes:
    """Validate an opaque blob is non-empty bytes no larger than max_bytes.

    Returns:
        The blob as immutable ``bytes``.
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise InvalidPayloadError(field, f"must be bytes, got {type(data).__name__}")
    blob = bytes(data)
    if not blob:
        raise InvalidPayloadError(field, "must not be empty")
    if len(blob) > max_bytes:
        raise InvalidPayloadError(
            field, f"is {len(blob)} bytes, limit is {max_bytes}"
        )
    return blob
