"""ProvingEngine protocol - the external zero-knowledge proving collaborator.

Contract: given an operation name and the artifact paths of the encrypted
commitments, return the proof bytes and the pass/fail verdict, or raise a
typed OrchestrationError. The proof bytes are opaque to the platform.

Implementations:
- SubprocessProvingEngine (infrastructure.adapters): runs the prover binary
- ProvingEngineStub (infrastructure.stubs): deterministic, for tests
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence


@dataclass(frozen=True)
class ProofArtifact:
    """Output of a successful proving run.

    Attributes:
        proof_bytes: Opaque proof material.
        passed: Verdict of the proven relation.
        proof_path: Where the proof artifact was read from, if on disk.
    """

    proof_bytes: bytes
    passed: bool
    proof_path: Path | None = None


class ProvingEngineProtocol(Protocol):
    """Protocol for producing proofs over encrypted commitments."""

    async def prove(
        self,
        operation: str,
        artifact_paths: Sequence[Path],
    ) -> ProofArtifact:
        """Prove ``operation`` over the commitments stored at artifact_paths.

        The caller bounds the run with a timeout and cancels the coroutine
        when it expires; implementations must stop the underlying work on
        cancellation.

        Raises:
            ArtifactMissingError: An input or the proof output is absent.
            ProvingFailedError: Non-zero exit or malformed output.
        """
        ...
