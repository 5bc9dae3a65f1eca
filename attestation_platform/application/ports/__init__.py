"""Application ports (abstract collaborators)."""

from attestation_platform.application.ports.artifact_store import ArtifactStoreProtocol
from attestation_platform.application.ports.attestation_ledger import (
    AttestationLedgerProtocol,
)
from attestation_platform.application.ports.encryption_engine import (
    EncryptionEngineProtocol,
)
from attestation_platform.application.ports.event_publisher import (
    EventPublisherProtocol,
)
from attestation_platform.application.ports.ledger_state import LedgerStateProtocol
from attestation_platform.application.ports.proving_engine import (
    ProofArtifact,
    ProvingEngineProtocol,
)
from attestation_platform.application.ports.time_authority import (
    TimeAuthorityProtocol,
)

__all__: list[str] = [
    "ArtifactStoreProtocol",
    "AttestationLedgerProtocol",
    "EncryptionEngineProtocol",
    "EventPublisherProtocol",
    "LedgerStateProtocol",
    "ProofArtifact",
    "ProvingEngineProtocol",
    "TimeAuthorityProtocol",
]
