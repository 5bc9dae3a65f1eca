"""Startup hooks for the ledger API.

On startup the API:
1. Configures structured logging from ENVIRONMENT
2. Builds the process-wide ledger runtime
3. Starts the proof worker on the runtime's event bus, unless
   PROOF_WORKER_ENABLED is false

USE_STUB_COLLABORATORS=true swaps the prover and encryptor binaries for the
deterministic stubs (local demos only).
"""

from __future__ import annotations

import asyncio
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from structlog import get_logger

from attestation_platform.api.dependencies.ledger import get_ledger_runtime
from attestation_platform.bootstrap.logging import configure_structlog
from attestation_platform.bootstrap.orchestrator import build_proof_worker
from attestation_platform.config import OrchestratorConfig

PROOF_WORKER_ENABLED_ENV = "PROOF_WORKER_ENABLED"
USE_STUB_COLLABORATORS_ENV = "USE_STUB_COLLABORATORS"

logger = get_logger()


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def proof_worker_enabled() -> bool:
    return _env_flag(PROOF_WORKER_ENABLED_ENV, True)


def use_stub_collaborators() -> bool:
    return _env_flag(USE_STUB_COLLABORATORS_ENV, False)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run the proof worker alongside the API for the app's lifetime."""
    configure_structlog()
    runtime = get_ledger_runtime()
    worker = None
    worker_task: asyncio.Task[None] | None = None

    if proof_worker_enabled():
        config = OrchestratorConfig.from_environment()
        worker = build_proof_worker(runtime, config, use_stubs=use_stub_collaborators())
        worker_task = asyncio.create_task(worker.run(), name="proof-worker")
        logger.info("proof_worker_attached", work_dir=str(config.work_dir))

    try:
        yield
    finally:
        if worker is not None and worker_task is not None:
            worker.stop()
            await worker_task
            runtime.events.unsubscribe(worker.events)
            logger.info("proof_worker_detached")
