"""Encryption collaborator invoked as an external binary.

    <binary> generate-keys <bits> <keys_dir>
    <binary> create-attestation <node_index> <public_key> <values_file> <output>

The values file holds the decimal plaintext and is written next to the
output artifact.
"""

from __future__ import annotations

from pathlib import Path

from structlog import get_logger

from attestation_platform.domain.errors import ArtifactMissingError, EncryptionFailedError
from attestation_platform.infrastructure.adapters.file_artifact_store import (
    PUBLIC_KEY_FILENAME,
)
from attestation_platform.infrastructure.adapters.process_runner import (
    ProcessOutcome,
    run_process,
)

logger = get_logger(__name__)


class SubprocessEncryptionEngine:
    """EncryptionEngineProtocol implementation running the encryptor binary."""

    def __init__(self, binary: str) -> None:
        self._binary = binary

    async def generate_keys(self, keys_dir: Path, key_size_bits: int) -> Path:
        keys_dir.mkdir(parents=True, exist_ok=True)
        await self._run(["generate-keys", str(key_size_bits), str(keys_dir)])
        public_key = keys_dir / PUBLIC_KEY_FILENAME
        if not public_key.is_file():
            raise ArtifactMissingError(public_key, "key generation produced no public key")
        logger.info("shared_keys_generated", keys_dir=str(keys_dir), key_size_bits=key_size_bits)
        return public_key

    async def encrypt_value(
        self,
        node_index: int,
        public_key_path: Path,
        value: int,
        output_path: Path,
    ) -> bytes:
        if not public_key_path.is_file():
            raise ArtifactMissingError(public_key_path, "public key missing")
        output_path.parent.mkdir(parents=True, exist_ok=True)
        values_file = output_path.with_suffix(".values.txt")
        values_file.write_text(str(value), encoding="utf-8")

        await self._run(
            [
                "create-attestation",
                str(node_index),
                str(public_key_path),
                str(values_file),
                str(output_path),
            ]
        )
        if not output_path.is_file() or output_path.stat().st_size == 0:
            raise ArtifactMissingError(output_path, "encryptor produced no attestation")
        payload = output_path.read_bytes()
        logger.info(
            "attestation_encrypted",
            node_index=node_index,
            path=str(output_path),
            payload_bytes=len(payload),
        )
        return payload

    async def _run(self, arguments: list[str]) -> ProcessOutcome:
        try:
            outcome = await run_process([self._binary, *arguments])
        except OSError as exc:
            raise EncryptionFailedError(
                f"cannot start encryptor {self._binary}: {exc}"
            ) from exc
        if outcome.returncode != 0:
            logger.error(
                "encryptor_exited_nonzero",
                command=arguments[0],
                exit_code=outcome.returncode,
                stderr_tail=outcome.stderr_tail,
            )
            raise EncryptionFailedError(
                f"encryptor {arguments[0]} exited with code {outcome.returncode}",
                exit_code=outcome.returncode,
                stderr_tail=outcome.stderr_tail,
            )
        return outcome
