"""In-memory and deterministic stand-ins for development and tests."""

from attestation_platform.infrastructure.stubs.encryption_engine_stub import (
    EncryptionEngineStub,
)
from attestation_platform.infrastructure.stubs.event_bus_stub import InMemoryEventBus
from attestation_platform.infrastructure.stubs.ledger_state_stub import (
    InMemoryLedgerState,
)
from attestation_platform.infrastructure.stubs.proving_engine_stub import (
    ProvingEngineStub,
)

__all__: list[str] = [
    "EncryptionEngineStub",
    "InMemoryEventBus",
    "InMemoryLedgerState",
    "ProvingEngineStub",
]
