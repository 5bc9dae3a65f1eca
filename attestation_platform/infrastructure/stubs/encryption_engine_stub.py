"""Stub implementation of EncryptionEngineProtocol.

Writes placeholder key files and pseudo-ciphertexts so that the attestor
flow and the orchestrator key check can run without the real collaborator.
The "ciphertext" is NOT encryption: it is a BLAKE3 keyed digest and must
never be used outside tests and local demos.
"""

from __future__ import annotations

from pathlib import Path

import blake3

PUBLIC_KEY_FILENAME = "public.key"
PRIVATE_KEY_FILENAME = "private.key"


class EncryptionEngineStub:
    """Deterministic stand-in for the homomorphic encryption collaborator."""

    def __init__(self) -> None:
        self.generated_keys = 0
        self.encrypted: list[tuple[int, int]] = []

    async def generate_keys(self, keys_dir: Path, key_size_bits: int) -> Path:
        keys_dir.mkdir(parents=True, exist_ok=True)
        seed = f"stub-key-{key_size_bits}".encode("utf-8")
        public_key = keys_dir / PUBLIC_KEY_FILENAME
        public_key.write_bytes(blake3.blake3(seed + b":public").digest())
        (keys_dir / PRIVATE_KEY_FILENAME).write_bytes(blake3.blake3(seed + b":private").digest())
        self.generated_keys += 1
        return public_key

    async def encrypt_value(
        self,
        node_index: int,
        public_key_path: Path,
        value: int,
        output_path: Path,
    ) -> bytes:
        key = public_key_path.read_bytes()
        payload = blake3.blake3(
            f"{node_index}:{value}".encode("utf-8"), key=key
        ).digest(length=100)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(payload)
        self.encrypted.append((node_index, value))
        return payload
