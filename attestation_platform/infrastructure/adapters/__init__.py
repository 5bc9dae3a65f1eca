"""Adapters connecting application ports to concrete collaborators."""

from attestation_platform.infrastructure.adapters.file_artifact_store import (
    FileArtifactStore,
)
from attestation_platform.infrastructure.adapters.http_ledger_client import (
    HttpLedgerClient,
)
from attestation_platform.infrastructure.adapters.in_process_ledger import (
    InProcessLedger,
)
from attestation_platform.infrastructure.adapters.subprocess_encryption_engine import (
    SubprocessEncryptionEngine,
)
from attestation_platform.infrastructure.adapters.subprocess_proving_engine import (
    SubprocessProvingEngine,
    parse_verdict,
)

__all__: list[str] = [
    "FileArtifactStore",
    "HttpLedgerClient",
    "InProcessLedger",
    "SubprocessEncryptionEngine",
    "SubprocessProvingEngine",
    "parse_verdict",
]
