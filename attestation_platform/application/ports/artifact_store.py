"""ArtifactStore protocol - byte-exact files handed to external collaborators."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence


class ArtifactStoreProtocol(Protocol):
    """Protocol for persisting payloads and locating key material."""

    @property
    def work_dir(self) -> Path:
        ...

    @property
    def keys_dir(self) -> Path:
        ...

    @property
    def attestations_dir(self) -> Path:
        ...

    @property
    def public_key_path(self) -> Path:
        ...

    def ensure_directories(self) -> None:
        """Create the work, keys and attestations directories."""
        ...

    def write_payloads(self, period_id: int, payloads: Sequence[bytes]) -> list[Path]:
        """Persist payloads byte-exactly, one file per payload, in order.

        Raises:
            ArtifactMissingError: If a file cannot be written or read back.
        """
        ...

    def all_present(self, paths: Sequence[Path]) -> bool:
        """Return True if every path exists and is a non-empty file."""
        ...
