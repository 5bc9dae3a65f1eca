"""EncryptionEngine protocol - the homomorphic encryption collaborator.

Produces the shared key pair and encrypted commitments. The platform
treats its outputs as opaque byte blobs.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class EncryptionEngineProtocol(Protocol):
    """Protocol for key generation and value encryption."""

    async def generate_keys(self, keys_dir: Path, key_size_bits: int) -> Path:
        """Generate the shared key pair into keys_dir.

        Returns:
            Path of the public key.

        Raises:
            ArtifactMissingError: If the key files are absent afterwards.
        """
        ...

    async def encrypt_value(
        self,
        node_index: int,
        public_key_path: Path,
        value: int,
        output_path: Path,
    ) -> bytes:
        """Encrypt ``value`` under the public key into output_path.

        Returns:
            The payload bytes written to output_path.
        """
        ...
