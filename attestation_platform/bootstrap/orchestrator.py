"""Bootstrap wiring for the proof orchestrator and the attestor flow."""

from __future__ import annotations

from attestation_platform.application.ports.attestation_ledger import (
    AttestationLedgerProtocol,
)
from attestation_platform.application.ports.encryption_engine import (
    EncryptionEngineProtocol,
)
from attestation_platform.application.ports.proving_engine import (
    ProvingEngineProtocol,
)
from attestation_platform.application.services.attestation_flow_service import (
    AttestationFlowService,
)
from attestation_platform.application.services.proof_orchestrator import (
    ProofOrchestrator,
)
from attestation_platform.bootstrap.ledger import LedgerRuntime
from attestation_platform.config import OrchestratorConfig
from attestation_platform.domain.models import evaluate_relation
from attestation_platform.infrastructure.adapters.file_artifact_store import (
    FileArtifactStore,
)
from attestation_platform.infrastructure.adapters.in_process_ledger import InProcessLedger
from attestation_platform.infrastructure.adapters.subprocess_encryption_engine import (
    SubprocessEncryptionEngine,
)
from attestation_platform.infrastructure.adapters.subprocess_proving_engine import (
    SubprocessProvingEngine,
)
from attestation_platform.infrastructure.stubs.encryption_engine_stub import (
    EncryptionEngineStub,
)
from attestation_platform.infrastructure.stubs.proving_engine_stub import (
    ProvingEngineStub,
)
from attestation_platform.workers.proof_worker import ProofWorker


def build_collaborators(
    config: OrchestratorConfig,
    artifact_store: FileArtifactStore,
    use_stubs: bool = False,
) -> tuple[ProvingEngineProtocol, EncryptionEngineProtocol]:
    """Return (prover, encryptor), either the binaries or the stubs."""
    if use_stubs:
        passed = True
        if config.plaintext_values is not None:
            passed = evaluate_relation(config.operation, *config.plaintext_values)
        return ProvingEngineStub(passed=passed), EncryptionEngineStub()
    return (
        SubprocessProvingEngine(
            binary=config.prover_binary,
            artifact_store=artifact_store,
            plaintext_values=config.plaintext_values,
        ),
        SubprocessEncryptionEngine(binary=config.encryptor_binary),
    )


def build_proof_orchestrator(
    ledger: AttestationLedgerProtocol,
    config: OrchestratorConfig,
    use_stubs: bool = False,
) -> ProofOrchestrator:
    """Build a ProofOrchestrator over the configured work dir."""
    artifact_store = FileArtifactStore(config.work_dir)
    prover, encryptor = build_collaborators(config, artifact_store, use_stubs)
    return ProofOrchestrator(
        ledger=ledger,
        prover=prover,
        artifact_store=artifact_store,
        config=config,
        encryptor=encryptor,
    )


def build_attestation_flow(
    ledger: AttestationLedgerProtocol,
    config: OrchestratorConfig,
    submit_on_behalf: bool = True,
    use_stubs: bool = False,
) -> AttestationFlowService:
    """Build an AttestationFlowService sharing the orchestrator's work dir."""
    artifact_store = FileArtifactStore(config.work_dir)
    _, encryptor = build_collaborators(config, artifact_store, use_stubs)
    return AttestationFlowService(
        ledger=ledger,
        encryptor=encryptor,
        artifact_store=artifact_store,
        key_size_bits=config.key_size_bits,
        submit_on_behalf=submit_on_behalf,
    )


def build_proof_worker(
    runtime: LedgerRuntime,
    config: OrchestratorConfig,
    use_stubs: bool = False,
) -> ProofWorker:
    """Build a ProofWorker subscribed to the runtime's event bus."""
    ledger = InProcessLedger(runtime.engine)
    orchestrator = build_proof_orchestrator(ledger, config, use_stubs)
    return ProofWorker(
        events=runtime.events.subscribe(),
        orchestrator=orchestrator,
        config=config,
    )


__all__ = [
    "build_attestation_flow",
    "build_collaborators",
    "build_proof_orchestrator",
    "build_proof_worker",
]
