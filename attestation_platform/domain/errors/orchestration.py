"""Proof orchestration errors.

Raised inside a single proof pipeline attempt. The orchestrator recovers
from all of these locally: the attempt aborts, the busy lock is released,
the period stays unverified, and the next backlog scan retries it.
"""

from __future__ import annotations

from pathlib import Path

from attestation_platform.domain.exceptions import AttestationPlatformError


class OrchestrationError(AttestationPlatformError):
    """Base error for failed proof pipeline attempts."""

    pass


class ArtifactMissingError(OrchestrationError):
    """Raised when a payload, key or proof file is absent or unreadable.

    Attributes:
        path: The artifact location that could not be used.
        reason: Short description of what went wrong.
    """

    def __init__(self, path: Path | str, reason: str = "missing") -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Artifact {self.path} unusable: {reason}")


class ProvingFailedError(OrchestrationError):
    """Raised when the proving collaborator exits non-zero or yields bad output.

    Attributes:
        exit_code: Process exit code, None when the process never ran.
        stderr_tail: Last lines of the collaborator's stderr.
    """

    def __init__(
        self,
        message: str,
        exit_code: int | None = None,
        stderr_tail: str = "",
    ) -> None:
        self.exit_code = exit_code
        self.stderr_tail = stderr_tail
        super().__init__(message)


class ProvingTimeoutError(OrchestrationError):
    """Raised when the proving collaborator exceeds its time budget.

    Attributes:
        timeout_seconds: The configured bound that was exceeded.
    """

    def __init__(self, timeout_seconds: float) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(f"Proving did not finish within {timeout_seconds}s")


class EncryptionFailedError(OrchestrationError):
    """Raised when the encryption collaborator fails to produce keys or a payload.

    Attributes:
        exit_code: Process exit code, None when the process never ran.
        stderr_tail: Last lines of the collaborator's stderr.
    """

    def __init__(
        self,
        message: str,
        exit_code: int | None = None,
        stderr_tail: str = "",
    ) -> None:
        self.exit_code = exit_code
        self.stderr_tail = stderr_tail
        super().__init__(message)
