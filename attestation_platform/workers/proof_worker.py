"""Proof worker: turns ledger events into published verification results.

Two inputs drive the ProofOrchestrator:
  - the event stream: each PeriodQuorumReached is dispatched as its own
    task, so deliveries are handled in parallel and the orchestrator's
    pipeline lock decides which one runs
  - the backlog re-scan: reconcile_backlog() once at start, then every
    rescan_interval_seconds; this is the retry path for dropped triggers
    and failed attempts

Other events are logged for operators. With auto_generate_proof disabled
the worker only logs.

Usage:
    worker = ProofWorker(events=bus.subscribe(), orchestrator=orchestrator, config=config)
    await run_proof_worker(worker)
"""

from __future__ import annotations

import asyncio
import os
import signal
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv
from structlog import get_logger

from attestation_platform.application.services.proof_orchestrator import (
    PipelineOutcome,
    PipelineReport,
)
from attestation_platform.bootstrap.logging import configure_structlog
from attestation_platform.config import LedgerConfig, OrchestratorConfig
from attestation_platform.domain.events import (
    AttestationRecordedEvent,
    PeriodAdvancedEvent,
    PeriodQuorumReachedEvent,
    VerificationPublishedEvent,
)
from attestation_platform.domain.models import describe_verdict
from attestation_platform.infrastructure.adapters.http_ledger_client import HttpLedgerClient

if TYPE_CHECKING:
    from attestation_platform.application.services.proof_orchestrator import (
        ProofOrchestrator,
    )
    from attestation_platform.domain.events import LedgerEvent

logger = get_logger(__name__)

DEFAULT_POLL_TIMEOUT_SECONDS = 0.5


@dataclass
class ProofWorkerMetrics:
    """Counters tracked by the proof worker."""

    events_consumed: int = 0
    proofs_dispatched: int = 0
    proofs_published: int = 0
    proofs_skipped: int = 0
    proofs_failed: int = 0
    rescans: int = 0
    last_event_time: float | None = None


class ProofWorker:
    """Consumes ledger events and drives the proof orchestrator."""

    def __init__(
        self,
        events: asyncio.Queue[LedgerEvent],
        orchestrator: ProofOrchestrator,
        config: OrchestratorConfig,
        poll_timeout: float = DEFAULT_POLL_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the worker.

        Args:
            events: Subscriber queue of the ledger event bus.
            orchestrator: Pipeline driver.
            config: Operation, re-scan interval and auto_generate_proof.
            poll_timeout: How long one queue poll waits before re-checking
                whether the worker was stopped.
        """
        self._events = events
        self._orchestrator = orchestrator
        self._config = config
        self._poll_timeout = poll_timeout
        self._running = False
        self._tasks: set[asyncio.Task[Any]] = set()
        self._metrics = ProofWorkerMetrics()

    @property
    def events(self) -> asyncio.Queue[LedgerEvent]:
        """The subscriber queue this worker consumes."""
        return self._events

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    async def run(self) -> None:
        """Run until stop() is called."""
        self._running = True
        logger.info(
            "proof_worker_starting",
            operation=self._config.operation,
            auto_generate_proof=self._config.auto_generate_proof,
            rescan_interval_seconds=self._config.rescan_interval_seconds,
        )
        rescan_task: asyncio.Task[None] | None = None
        if self._config.auto_generate_proof:
            rescan_task = asyncio.create_task(self._rescan_loop())

        try:
            while self._running:
                try:
                    event = await asyncio.wait_for(
                        self._events.get(), timeout=self._poll_timeout
                    )
                except asyncio.TimeoutError:
                    continue
                self._handle_event(event)
        finally:
            self._running = False
            if rescan_task is not None:
                rescan_task.cancel()
                await asyncio.gather(rescan_task, return_exceptions=True)
            await self._cancel_in_flight()
            logger.info("proof_worker_stopped", **self.get_metrics())

    def stop(self) -> None:
        """Signal the worker to stop; in-flight pipelines are cancelled."""
        logger.info("proof_worker_stop_requested", in_flight=len(self._tasks))
        self._running = False
        for task in self._tasks:
            task.cancel()

    def get_metrics(self) -> dict[str, Any]:
        return {
            "events_consumed": self._metrics.events_consumed,
            "proofs_dispatched": self._metrics.proofs_dispatched,
            "proofs_published": self._metrics.proofs_published,
            "proofs_skipped": self._metrics.proofs_skipped,
            "proofs_failed": self._metrics.proofs_failed,
            "rescans": self._metrics.rescans,
            "in_flight": len(self._tasks),
            "running": self._running,
        }

    def _handle_event(self, event: LedgerEvent) -> None:
        self._metrics.events_consumed += 1
        self._metrics.last_event_time = time.monotonic()

        if isinstance(event, PeriodQuorumReachedEvent):
            logger.info(
                "period_quorum_observed",
                period_id=event.period_id,
                attestor_count=event.attestor_count,
            )
            if self._config.auto_generate_proof:
                self._dispatch(event.period_id, event.attestor_count)
        elif isinstance(event, AttestationRecordedEvent):
            logger.info(
                "attestation_observed",
                period_id=event.period_id,
                attestor=event.attestor,
            )
        elif isinstance(event, VerificationPublishedEvent):
            logger.info(
                "verification_observed",
                period_id=event.period_id,
                passed=event.passed,
                interpretation=describe_verdict(self._config.operation, event.passed),
            )
        elif isinstance(event, PeriodAdvancedEvent):
            logger.info(
                "period_advance_observed",
                previous_period_id=event.previous_period_id,
                current_period_id=event.current_period_id,
                forced=event.forced,
            )
        else:
            logger.debug("ledger_event_observed", event_type=event.event_type)

    def _dispatch(self, period_id: int, attestor_count: int) -> None:
        task = asyncio.create_task(
            self._orchestrator.handle_quorum_reached(period_id, attestor_count),
            name=f"proof-period-{period_id}",
        )
        self._metrics.proofs_dispatched += 1
        self._tasks.add(task)
        task.add_done_callback(self._on_pipeline_done)

    def _on_pipeline_done(self, task: asyncio.Task[PipelineReport]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.info("proof_pipeline_cancelled", task=task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            self._metrics.proofs_failed += 1
            logger.error(
                "proof_pipeline_crashed",
                task=task.get_name(),
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return
        self._record(task.result())

    def _record(self, report: PipelineReport) -> None:
        if report.outcome is PipelineOutcome.PUBLISHED:
            self._metrics.proofs_published += 1
        elif report.outcome is PipelineOutcome.FAILED:
            self._metrics.proofs_failed += 1
        else:
            self._metrics.proofs_skipped += 1

    async def _rescan_loop(self) -> None:
        while self._running:
            try:
                for report in await self._orchestrator.reconcile_backlog():
                    self._record(report)
            except Exception as exc:
                logger.error(
                    "backlog_scan_failed",
                    error_type=type(exc).__name__,
                    error=str(exc),
                )
            self._metrics.rescans += 1
            await asyncio.sleep(self._config.rescan_interval_seconds)

    async def _cancel_in_flight(self) -> None:
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)


async def run_proof_worker(worker: ProofWorker) -> None:
    """Run a proof worker, stopping it on SIGINT/SIGTERM."""
    loop = asyncio.get_running_loop()

    def signal_handler() -> None:
        worker.stop()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, signal_handler)

    try:
        await worker.run()
    finally:
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.remove_signal_handler(sig)


LEDGER_API_URL_ENV = "LEDGER_API_URL"
DEFAULT_LEDGER_API_URL = "http://localhost:8000"


async def _run_from_env() -> None:
    """Run a standalone worker against a remote ledger API.

    Without an event stream the worker relies on the backlog re-scan alone.
    """
    load_dotenv()
    configure_structlog()

    from attestation_platform.bootstrap.orchestrator import build_proof_orchestrator

    config = OrchestratorConfig.from_environment()
    ledger_config = LedgerConfig.from_environment()
    base_url = os.environ.get(LEDGER_API_URL_ENV, DEFAULT_LEDGER_API_URL)

    async with HttpLedgerClient(base_url, operator=ledger_config.admin_identity) as ledger:
        orchestrator = build_proof_orchestrator(ledger, config)
        worker = ProofWorker(
            events=asyncio.Queue(),
            orchestrator=orchestrator,
            config=config,
        )
        logger.info("proof_worker_remote_ledger", base_url=base_url)
        await run_proof_worker(worker)


def main() -> None:
    asyncio.run(_run_from_env())


if __name__ == "__main__":
    main()
