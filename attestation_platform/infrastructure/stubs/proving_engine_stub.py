"""Stub implementation of ProvingEngineProtocol for tests and local runs.

Produces a deterministic proof (BLAKE3 over the operation and the artifact
bytes) and a configurable verdict. Can be told to fail, or to take a given
amount of time so that concurrency and timeout paths can be exercised.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Sequence

import blake3

from attestation_platform.application.ports.proving_engine import ProofArtifact
from attestation_platform.domain.errors import ArtifactMissingError, ProvingFailedError


class ProvingEngineStub:
    """Configurable in-process prover."""

    def __init__(
        self,
        passed: bool = True,
        delay_seconds: float = 0.0,
        fail_with: Exception | None = None,
    ) -> None:
        """Initialize the stub.

        Args:
            passed: Verdict returned by successful runs.
            delay_seconds: Simulated proving time.
            fail_with: Exception raised by every run, if set.
        """
        self.passed = passed
        self.delay_seconds = delay_seconds
        self.fail_with = fail_with
        self.calls: list[tuple[str, tuple[Path, ...]]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def prove(self, operation: str, artifact_paths: Sequence[Path]) -> ProofArtifact:
        self.calls.append((operation, tuple(artifact_paths)))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay_seconds:
                await asyncio.sleep(self.delay_seconds)
            if self.fail_with is not None:
                raise self.fail_with

            hasher = blake3.blake3(operation.encode("utf-8"))
            for path in artifact_paths:
                if not path.is_file():
                    raise ArtifactMissingError(path, "input artifact missing")
                hasher.update(path.read_bytes())
            proof = hasher.digest(length=64)
            if not proof:
                raise ProvingFailedError("empty proof")
            return ProofArtifact(proof_bytes=proof, passed=self.passed)
        finally:
            self.in_flight -= 1
