"""Proving collaborator invoked as an external binary.

Invocation (working directory is the artifact work dir):

    <binary> --prove --operation <op> --att-file1 <path> --att-file2 <path>

with KEYS_DIR and ATTESTATIONS_DIR exported. Success means exit code 0
and a proof.bin in the work dir (or, for binaries that ignore the working
directory, in the current directory, from where it is copied).

The verdict is read from a ``verdict: passed|failed`` line on stdout. When
the binary does not print one, the relation is evaluated on the configured
plaintext values, if any; otherwise the run is treated as failed.
"""

from __future__ import annotations

import os
import re
import shutil
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

from structlog import get_logger

from attestation_platform.application.ports.proving_engine import ProofArtifact
from attestation_platform.domain.errors import ArtifactMissingError, ProvingFailedError
from attestation_platform.domain.models import evaluate_relation
from attestation_platform.infrastructure.adapters.process_runner import run_process

if TYPE_CHECKING:
    from attestation_platform.application.ports.artifact_store import (
        ArtifactStoreProtocol,
    )

logger = get_logger(__name__)

PROOF_FILENAME = "proof.bin"
_VERDICT_PATTERN = re.compile(r"^\s*verdict\s*[:=]\s*(passed|failed)\s*$", re.I | re.M)


def parse_verdict(stdout: str) -> bool | None:
    """Return the last verdict printed on stdout, or None if there is none."""
    matches = _VERDICT_PATTERN.findall(stdout)
    if not matches:
        return None
    return matches[-1].lower() == "passed"


class SubprocessProvingEngine:
    """ProvingEngineProtocol implementation running the prover binary."""

    def __init__(
        self,
        binary: str,
        artifact_store: ArtifactStoreProtocol,
        plaintext_values: tuple[int, int] | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            binary: Prover executable (path or name on PATH).
            artifact_store: Provides the work, keys and attestations dirs.
            plaintext_values: (first, second) operands used to derive the
                verdict when the prover does not report one.
        """
        self._binary = binary
        self._artifacts = artifact_store
        self._plaintext_values = plaintext_values

    @property
    def proof_path(self) -> Path:
        return self._artifacts.work_dir / PROOF_FILENAME

    async def prove(self, operation: str, artifact_paths: Sequence[Path]) -> ProofArtifact:
        for path in artifact_paths:
            if not path.is_file():
                raise ArtifactMissingError(path, "input artifact missing")

        args = [self._binary, "--prove", "--operation", operation]
        for index, path in enumerate(artifact_paths, start=1):
            args.extend([f"--att-file{index}", str(path)])

        env = dict(os.environ)
        env["KEYS_DIR"] = str(self._artifacts.keys_dir)
        env["ATTESTATIONS_DIR"] = str(self._artifacts.attestations_dir)

        proof_path = self.proof_path
        try:
            proof_path.unlink(missing_ok=True)
        except OSError as exc:
            raise ArtifactMissingError(proof_path, f"cannot clear stale proof: {exc}") from exc
        log = logger.bind(operation=operation, binary=self._binary)
        log.info("prover_started", artifacts=[str(path) for path in artifact_paths])

        try:
            outcome = await run_process(args, cwd=self._artifacts.work_dir, env=env)
        except OSError as exc:
            raise ProvingFailedError(f"cannot start prover {self._binary}: {exc}") from exc

        if outcome.returncode != 0:
            log.error(
                "prover_exited_nonzero",
                exit_code=outcome.returncode,
                stderr_tail=outcome.stderr_tail,
            )
            raise ProvingFailedError(
                f"prover exited with code {outcome.returncode}",
                exit_code=outcome.returncode,
                stderr_tail=outcome.stderr_tail,
            )

        proof_bytes = self._collect_proof(proof_path)
        passed = self._verdict(operation, outcome.stdout)
        log.info("prover_finished", proof_bytes=len(proof_bytes), passed=passed)
        return ProofArtifact(proof_bytes=proof_bytes, passed=passed, proof_path=proof_path)

    def _collect_proof(self, proof_path: Path) -> bytes:
        if not proof_path.is_file():
            fallback = Path.cwd() / PROOF_FILENAME
            if fallback.resolve() == proof_path.resolve() or not fallback.is_file():
                raise ArtifactMissingError(proof_path, "prover produced no proof file")
            logger.info("proof_found_in_fallback_location", path=str(fallback))
            try:
                shutil.copyfile(fallback, proof_path)
            except OSError as exc:
                raise ArtifactMissingError(proof_path, f"copy failed: {exc}") from exc

        try:
            proof_bytes = proof_path.read_bytes()
        except OSError as exc:
            raise ArtifactMissingError(proof_path, f"unreadable: {exc}") from exc
        if not proof_bytes:
            raise ProvingFailedError("prover produced an empty proof file")
        return proof_bytes

    def _verdict(self, operation: str, stdout: str) -> bool:
        verdict = parse_verdict(stdout)
        if verdict is not None:
            return verdict
        if self._plaintext_values is not None:
            left, right = self._plaintext_values
            logger.info("verdict_derived_from_plaintext", operation=operation)
            try:
                return evaluate_relation(operation, left, right)
            except ValueError as exc:
                raise ProvingFailedError(str(exc)) from exc
        raise ProvingFailedError("prover output carries no verdict")
