"""Ledger-level domain errors.

These errors are raised synchronously by the Period Engine when a mutating
call violates one of the ledger rules. They are never retried automatically;
the caller decides what to do with the rejection.

Rules enforced:
- Privileged calls are restricted to the designated administrator
- Submissions are restricted to registered attestors
- An identity is registered at most once
- At most one attestation per (period, attestor)
- A result requires quorum and is written at most once per period
"""

from __future__ import annotations

from typing import Any

from attestation_platform.domain.exceptions import AttestationPlatformError


class LedgerError(AttestationPlatformError):
    """Base error for rejected ledger operations.

    Subclasses set ``error_type`` and ``title`` for RFC 7807 rendering and
    ``status`` for the HTTP surface.
    """

    error_type: str = "urn:attestation:ledger:error"
    title: str = "Ledger Error"
    status: int = 400

    def to_rfc7807_dict(self) -> dict[str, Any]:
        """Serialize to RFC 7807 problem details.

        Returns:
            Dictionary with type, title, status and detail plus the
            identifiers carried by the concrete error.
        """
        result: dict[str, Any] = {
            "type": self.error_type,
            "title": self.title,
            "status": self.status,
            "detail": str(self),
        }
        result.update(self._extensions())
        return result

    def _extensions(self) -> dict[str, Any]:
        return {}


class UnauthorizedError(LedgerError):
    """Raised when the caller lacks the role an operation requires.

    Attributes:
        caller: Identity that issued the call.
        required_role: "administrator" or "attestor".
    """

    error_type = "urn:attestation:ledger:unauthorized"
    title = "Unauthorized"
    status = 403

    def __init__(self, caller: str, required_role: str) -> None:
        self.caller = caller
        self.required_role = required_role
        super().__init__(f"Caller {caller} is not a registered {required_role}")

    def _extensions(self) -> dict[str, Any]:
        return {"caller": self.caller, "required_role": self.required_role}


class AlreadyRegisteredError(LedgerError):
    """Raised when registering an identity that is already an attestor.

    Attributes:
        address: The identity that was already registered.
    """

    error_type = "urn:attestation:ledger:already-registered"
    title = "Attestor Already Registered"
    status = 409

    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__(f"Attestor {address} already registered")

    def _extensions(self) -> dict[str, Any]:
        return {"address": self.address}


class DuplicateSubmissionError(LedgerError):
    """Raised when an attestor submits twice for the same period.

    Attributes:
        period_id: The period already attested.
        address: The attestor identity.
    """

    error_type = "urn:attestation:ledger:duplicate-submission"
    title = "Duplicate Submission"
    status = 409

    def __init__(self, period_id: int, address: str) -> None:
        self.period_id = period_id
        self.address = address
        super().__init__(
            f"Attestor {address} already submitted for period {period_id}"
        )

    def _extensions(self) -> dict[str, Any]:
        return {"period_id": self.period_id, "address": self.address}


class PeriodNotCompleteError(LedgerError):
    """Raised when publishing a result before the period reached quorum.

    Attributes:
        period_id: The period targeted by the publish call.
        attestor_count: Distinct attestors that submitted so far.
        required_count: Quorum threshold.
    """

    error_type = "urn:attestation:ledger:period-not-complete"
    title = "Period Not Complete"
    status = 409

    def __init__(self, period_id: int, attestor_count: int, required_count: int) -> None:
        self.period_id = period_id
        self.attestor_count = attestor_count
        self.required_count = required_count
        super().__init__(
            f"Period {period_id} has {attestor_count} of {required_count} "
            "required attestations"
        )

    def _extensions(self) -> dict[str, Any]:
        return {
            "period_id": self.period_id,
            "attestor_count": self.attestor_count,
            "required_count": self.required_count,
        }


class ResultAlreadyPublishedError(LedgerError):
    """Raised when a verification result already exists for the period.

    Attributes:
        period_id: The period that is already verified.
    """

    error_type = "urn:attestation:ledger:result-already-published"
    title = "Result Already Published"
    status = 409

    def __init__(self, period_id: int) -> None:
        self.period_id = period_id
        super().__init__(f"Verification result already published for period {period_id}")

    def _extensions(self) -> dict[str, Any]:
        return {"period_id": self.period_id}
