"""Tests for the bootstrap wiring helpers."""

from __future__ import annotations

from pathlib import Path

from attestation_platform.bootstrap.ledger import build_ledger_runtime
from attestation_platform.bootstrap.orchestrator import (
    build_attestation_flow,
    build_collaborators,
    build_proof_orchestrator,
    build_proof_worker,
)
from attestation_platform.config import LedgerConfig, OrchestratorConfig
from attestation_platform.infrastructure.adapters import (
    FileArtifactStore,
    InProcessLedger,
    SubprocessEncryptionEngine,
    SubprocessProvingEngine,
)
from attestation_platform.infrastructure.stubs import (
    EncryptionEngineStub,
    ProvingEngineStub,
)


class TestLedgerRuntime:
    def test_runtime_shares_state_and_bus(self) -> None:
        runtime = build_ledger_runtime(LedgerConfig(required_attestor_count=3, admin_identity="Ops"))

        assert runtime.engine.required_attestor_count == 3
        assert runtime.engine.admin_identity == "ops"
        assert runtime.state.required_attestor_count == 3
        assert runtime.events.history == []


class TestCollaborators:
    def test_binaries_by_default(self, tmp_path: Path) -> None:
        config = OrchestratorConfig(work_dir=tmp_path)

        prover, encryptor = build_collaborators(config, FileArtifactStore(tmp_path))

        assert isinstance(prover, SubprocessProvingEngine)
        assert isinstance(encryptor, SubprocessEncryptionEngine)

    def test_stub_verdict_follows_plaintext(self, tmp_path: Path) -> None:
        config = OrchestratorConfig(work_dir=tmp_path, exchange_value=5, regulator_value=9)

        prover, encryptor = build_collaborators(config, FileArtifactStore(tmp_path), use_stubs=True)

        assert isinstance(prover, ProvingEngineStub)
        assert prover.passed is False
        assert isinstance(encryptor, EncryptionEngineStub)


class TestServices:
    def test_orchestrator_and_flow_share_work_dir(self, tmp_path: Path) -> None:
        runtime = build_ledger_runtime(LedgerConfig())
        ledger = InProcessLedger(runtime.engine)
        config = OrchestratorConfig(work_dir=tmp_path)

        orchestrator = build_proof_orchestrator(ledger, config, use_stubs=True)
        flow = build_attestation_flow(ledger, config, use_stubs=True)

        assert not orchestrator.is_busy
        assert flow is not None

    async def test_worker_subscribes_to_runtime_bus(self, tmp_path: Path) -> None:
        runtime = build_ledger_runtime(LedgerConfig(admin_identity="admin"))
        worker = build_proof_worker(runtime, OrchestratorConfig(work_dir=tmp_path), use_stubs=True)
        runtime.engine.register_attestor("admin", "0xexchange", "Exchange")

        assert worker.get_metrics()["running"] is False
        assert len(runtime.events.history) == 1
