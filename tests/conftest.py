"""
Pytest configuration and shared fixtures for attestation platform tests.

Testing Standards:
- Async tests run under pytest-asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for async collaborator mocking
- Unit tests go in tests/unit/<layer>/
- Integration tests go in tests/integration/
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from attestation_platform.application.services.period_engine import PeriodEngine
from attestation_platform.config import OrchestratorConfig
from attestation_platform.infrastructure.adapters.file_artifact_store import (
    FileArtifactStore,
)
from attestation_platform.infrastructure.adapters.in_process_ledger import (
    InProcessLedger,
)
from attestation_platform.infrastructure.stubs.event_bus_stub import InMemoryEventBus
from attestation_platform.infrastructure.stubs.ledger_state_stub import (
    InMemoryLedgerState,
)
from tests.helpers.fake_time_authority import FakeTimeAuthority
from tests.helpers.identities import ADMIN, EXCHANGE, REGULATOR


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from attestation_platform import __version__

    return __version__


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    return FakeTimeAuthority(frozen_at=datetime(2026, 1, 15, 10, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def ledger_state() -> InMemoryLedgerState:
    return InMemoryLedgerState(required_attestor_count=2)


@pytest.fixture
def event_bus() -> InMemoryEventBus:
    return InMemoryEventBus()


@pytest.fixture
def engine(
    ledger_state: InMemoryLedgerState,
    event_bus: InMemoryEventBus,
    fake_time_authority: FakeTimeAuthority,
) -> PeriodEngine:
    """PeriodEngine with a quorum of 2 and ADMIN as administrator."""
    return PeriodEngine(
        state=ledger_state,
        events=event_bus,
        time_authority=fake_time_authority,
        admin_identity=ADMIN,
    )


@pytest.fixture
def registered_engine(engine: PeriodEngine) -> PeriodEngine:
    """Engine with EXCHANGE and REGULATOR registered under their role names."""
    engine.register_attestor(ADMIN, EXCHANGE, "Exchange")
    engine.register_attestor(ADMIN, REGULATOR, "Regulator")
    return engine


@pytest.fixture
def ledger(registered_engine: PeriodEngine) -> InProcessLedger:
    return InProcessLedger(registered_engine)


@pytest.fixture
def artifact_store(tmp_path: Path) -> FileArtifactStore:
    store = FileArtifactStore(tmp_path / "work")
    store.ensure_directories()
    store.public_key_path.write_bytes(b"shared-public-key")
    return store


@pytest.fixture
def orchestrator_config(tmp_path: Path) -> OrchestratorConfig:
    return OrchestratorConfig(
        work_dir=tmp_path / "work",
        proving_timeout_seconds=2.0,
        rescan_interval_seconds=0.05,
        payload_cache_size=2,
    )
