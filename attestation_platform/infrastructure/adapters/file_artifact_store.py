"""Filesystem artifact store.

Layout under the work directory:

    <work_dir>/
        keys/public.key                     shared key pair
        attestations/period_<id>/attestation_<n>.bin
        proof.bin                           written by the prover

Payloads are written byte-exactly and read back before being handed to
the prover; a mismatch is reported as ArtifactMissingError.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from structlog import get_logger

from attestation_platform.domain.errors import ArtifactMissingError

logger = get_logger(__name__)

KEYS_DIRNAME = "keys"
ATTESTATIONS_DIRNAME = "attestations"
PUBLIC_KEY_FILENAME = "public.key"


class FileArtifactStore:
    """ArtifactStoreProtocol implementation over a local directory."""

    def __init__(self, work_dir: Path | str) -> None:
        self._work_dir = Path(work_dir).resolve()

    @property
    def work_dir(self) -> Path:
        return self._work_dir

    @property
    def keys_dir(self) -> Path:
        return self._work_dir / KEYS_DIRNAME

    @property
    def attestations_dir(self) -> Path:
        return self._work_dir / ATTESTATIONS_DIRNAME

    @property
    def public_key_path(self) -> Path:
        return self.keys_dir / PUBLIC_KEY_FILENAME

    def ensure_directories(self) -> None:
        for directory in (self._work_dir, self.keys_dir, self.attestations_dir):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise ArtifactMissingError(
                    directory, f"cannot create directory: {exc}"
                ) from exc

    def period_dir(self, period_id: int) -> Path:
        return self.attestations_dir / f"period_{period_id}"

    def write_payloads(self, period_id: int, payloads: Sequence[bytes]) -> list[Path]:
        """Write payloads as attestation_1.bin, attestation_2.bin, ... in order."""
        target = self.period_dir(period_id)
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ArtifactMissingError(target, f"cannot create directory: {exc}") from exc

        paths: list[Path] = []
        for index, payload in enumerate(payloads, start=1):
            path = target / f"attestation_{index}.bin"
            try:
                path.write_bytes(payload)
                written = path.read_bytes()
            except OSError as exc:
                raise ArtifactMissingError(path, f"write failed: {exc}") from exc
            if written != payload:
                raise ArtifactMissingError(path, "read-back does not match payload")
            logger.debug(
                "attestation_artifact_written",
                period_id=period_id,
                path=str(path),
                payload_bytes=len(payload),
            )
            paths.append(path)
        return paths

    def all_present(self, paths: Sequence[Path]) -> bool:
        return all(path.is_file() and path.stat().st_size > 0 for path in paths)
