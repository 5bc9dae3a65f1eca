"""Proof Orchestrator.

Bridges the ledger's PeriodQuorumReached signal to a completed
publish_verification_result call.

Pipeline for one period id:
  1. Idempotency check - exit if a result already exists
  2. Retrieve - resolve the role attestors, fetch their payloads and
     persist them as byte-exact artifacts
  3. Prove - run the proving collaborator under a timeout
  4. Publish - ResultAlreadyPublished from a concurrent publisher is success

Concurrency:
At most one pipeline runs at a time, process wide. The pipeline lock is an
asyncio.Lock held for the whole body, so it is released on every exit path
(success, failure, timeout, cancellation). A trigger that finds the lock
held is logged and dropped; the periodic backlog re-scan is the retry path.

The orchestrator belongs to the event loop it was first used on. The
try-acquire is atomic only there: producers on other threads must hand
triggers over with asyncio.run_coroutine_threadsafe(..., loop) instead of
calling it directly.

An attempt never raises out of handle_quorum_reached: any exception
becomes a FAILED report. reconcile_backlog records a failed period and
moves on to the next one; only the initial ledger reads of a scan raise.

Two entry points share the pipeline: handle_quorum_reached (live events)
and reconcile_backlog (startup and periodic re-scan). The idempotency check
makes redundant or overlapping invocations safe.
"""

from __future__ import annotations

import asyncio
from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from structlog import get_logger

from attestation_platform.domain.errors import (
    ArtifactMissingError,
    InvalidPayloadError,
    LedgerError,
    OrchestrationError,
    ProvingTimeoutError,
    ResultAlreadyPublishedError,
)

if TYPE_CHECKING:
    from attestation_platform.application.ports.artifact_store import (
        ArtifactStoreProtocol,
    )
    from attestation_platform.application.ports.attestation_ledger import (
        AttestationLedgerProtocol,
    )
    from attestation_platform.application.ports.encryption_engine import (
        EncryptionEngineProtocol,
    )
    from attestation_platform.application.ports.proving_engine import (
        ProofArtifact,
        ProvingEngineProtocol,
    )
    from attestation_platform.config import OrchestratorConfig

logger = get_logger(__name__)


class PipelineOutcome(Enum):
    """How a single pipeline invocation ended."""

    PUBLISHED = "published"
    ALREADY_PUBLISHED = "already_published"
    SKIPPED_BUSY = "skipped_busy"
    NOT_COMPLETE = "not_complete"
    FAILED = "failed"


@dataclass(frozen=True)
class PipelineReport:
    """Result of one pipeline invocation.

    Attributes:
        period_id: Period the invocation targeted.
        outcome: How it ended.
        passed: Published verdict, when outcome is PUBLISHED.
        error: Failure description, when outcome is FAILED.
    """

    period_id: int
    outcome: PipelineOutcome
    passed: bool | None = None
    error: str | None = None


class ProofOrchestrator:
    """Drives proof generation and publication exactly once per period.

    Example:
        >>> orchestrator = ProofOrchestrator(
        ...     ledger=ledger,
        ...     prover=SubprocessProvingEngine(...),
        ...     artifact_store=FileArtifactStore(work_dir),
        ...     config=OrchestratorConfig.from_environment(),
        ... )
        >>> report = await orchestrator.handle_quorum_reached(0, 2)
        >>> reports = await orchestrator.reconcile_backlog()
    """

    def __init__(
        self,
        ledger: AttestationLedgerProtocol,
        prover: ProvingEngineProtocol,
        artifact_store: ArtifactStoreProtocol,
        config: OrchestratorConfig,
        encryptor: EncryptionEngineProtocol | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            ledger: Ledger API used for reads and publication.
            prover: Proving collaborator.
            artifact_store: Where payload artifacts are written.
            config: Operation, roles, timeout and cache settings.
            encryptor: Optional encryption collaborator, used to regenerate
                the shared keys when they are missing.
        """
        self._ledger = ledger
        self._prover = prover
        self._artifacts = artifact_store
        self._config = config
        self._encryptor = encryptor
        self._pipeline_lock = asyncio.Lock()
        self._payload_cache: OrderedDict[int, list[Path]] = OrderedDict()

    @property
    def is_busy(self) -> bool:
        """True while a pipeline holds the lock."""
        return self._pipeline_lock.locked()

    @property
    def cached_periods(self) -> list[int]:
        """Period ids in the payload cache, least recently used first."""
        return list(self._payload_cache)

    async def handle_quorum_reached(
        self, period_id: int, attestor_count: int
    ) -> PipelineReport:
        """Entry point for PeriodQuorumReached events.

        Safe against duplicate and out-of-order delivery.
        """
        log = logger.bind(period_id=period_id, attestor_count=attestor_count)
        # No await between the check and the acquisition, so this is
        # an atomic try-acquire on the event loop.
        if self._pipeline_lock.locked():
            log.info("proof_trigger_dropped", reason="pipeline_busy")
            return PipelineReport(period_id, PipelineOutcome.SKIPPED_BUSY)

        async with self._pipeline_lock:
            log.info("proof_pipeline_started")
            try:
                return await self._run_pipeline(period_id)
            except Exception as exc:
                # Ledger transport and other unexpected failures end this
                # attempt only; the backlog re-scan retries the period.
                log.exception(
                    "proof_pipeline_crashed",
                    error_type=type(exc).__name__,
                    error=str(exc),
                )
                return PipelineReport(period_id, PipelineOutcome.FAILED, error=str(exc))

    async def reconcile_backlog(self) -> list[PipelineReport]:
        """Run the pipeline for every complete period without a result.

        Enumerates periods 0..current. Used at startup and by the periodic
        re-scan, so periods whose quorum event was missed are recovered.
        """
        current = await self._ledger.current_period_id()
        required = await self._ledger.required_attestor_count()
        logger.info("backlog_scan_started", current_period_id=current, required_count=required)

        reports: list[PipelineReport] = []
        for period_id in range(current + 1):
            try:
                count = await self._ledger.period_attestor_count(period_id)
                if count < required:
                    continue
                if await self._ledger.get_verification_result(period_id) is not None:
                    continue
            except Exception as exc:
                logger.error(
                    "backlog_period_check_failed",
                    period_id=period_id,
                    error_type=type(exc).__name__,
                    error=str(exc),
                )
                reports.append(
                    PipelineReport(period_id, PipelineOutcome.FAILED, error=str(exc))
                )
                continue
            logger.info("backlog_period_pending", period_id=period_id, attestor_count=count)
            reports.append(await self.handle_quorum_reached(period_id, count))

        logger.info("backlog_scan_finished", pending_periods=len(reports))
        return reports

    async def _run_pipeline(self, period_id: int) -> PipelineReport:
        log = logger.bind(period_id=period_id, operation=self._config.operation)

        if await self._ledger.get_verification_result(period_id) is not None:
            log.info("proof_pipeline_skipped", reason="result_exists")
            return PipelineReport(period_id, PipelineOutcome.ALREADY_PUBLISHED)

        required = await self._ledger.required_attestor_count()
        count = await self._ledger.period_attestor_count(period_id)
        if count < required:
            log.warning(
                "proof_pipeline_skipped",
                reason="period_not_complete",
                attestor_count=count,
                required_count=required,
            )
            return PipelineReport(period_id, PipelineOutcome.NOT_COMPLETE)

        try:
            self._artifacts.ensure_directories()
            await self._ensure_key_material()
            artifact_paths = await self._retrieve_artifacts(period_id)
            proof = await self._prove(artifact_paths)
        except OrchestrationError as exc:
            log.error(
                "proof_pipeline_failed",
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return PipelineReport(period_id, PipelineOutcome.FAILED, error=str(exc))

        try:
            await self._ledger.publish_verification_result(
                period_id, proof.passed, proof.proof_bytes
            )
        except ResultAlreadyPublishedError:
            log.info("verification_publish_raced", reason="result_already_published")
            return PipelineReport(period_id, PipelineOutcome.ALREADY_PUBLISHED)
        except (LedgerError, InvalidPayloadError) as exc:
            log.error(
                "verification_publish_failed",
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return PipelineReport(period_id, PipelineOutcome.FAILED, error=str(exc))

        log.info(
            "proof_pipeline_completed",
            passed=proof.passed,
            proof_bytes=len(proof.proof_bytes),
        )
        return PipelineReport(period_id, PipelineOutcome.PUBLISHED, passed=proof.passed)

    async def _prove(self, artifact_paths: list[Path]) -> ProofArtifact:
        timeout = self._config.proving_timeout_seconds
        try:
            return await asyncio.wait_for(
                self._prover.prove(self._config.operation, artifact_paths),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            raise ProvingTimeoutError(timeout) from None

    async def _ensure_key_material(self) -> None:
        public_key = self._artifacts.public_key_path
        if public_key.is_file():
            return

        logger.warning("shared_public_key_missing", path=str(public_key))
        if self._encryptor is not None:
            try:
                await self._encryptor.generate_keys(
                    self._artifacts.keys_dir, self._config.key_size_bits
                )
            except OrchestrationError as exc:
                logger.error("shared_key_generation_failed", error=str(exc))

        if not public_key.is_file():
            raise ArtifactMissingError(public_key, "shared public key not found")

    async def _resolve_attestors(self, period_id: int) -> list[str]:
        """Pick one attestor per configured role, in role order.

        Falls back to the first N distinct submitters of the period when a
        role cannot be resolved or the role holder did not submit.
        """
        roles = self._config.attestor_roles
        submitters = await self._ledger.period_attestors(period_id)
        log = logger.bind(period_id=period_id, roles=list(roles))

        try:
            registry = await self._ledger.list_attestors()
        except Exception as exc:
            log.warning(
                "role_lookup_failed",
                error_type=type(exc).__name__,
                error=str(exc),
            )
            registry = []

        by_name: dict[str, str] = {}
        for attestor in registry:
            by_name.setdefault(attestor.name.lower(), attestor.address)
        resolved: list[str] = []
        for role in roles:
            address = by_name.get(role.lower())
            if address is None or address not in submitters:
                break
            resolved.append(address)

        if len(resolved) == len(roles):
            log.info("attestors_resolved_by_role", attestors=resolved)
            return resolved

        distinct = list(dict.fromkeys(submitters))
        if len(distinct) < len(roles):
            raise ArtifactMissingError(
                self._artifacts.attestations_dir,
                f"period {period_id} has {len(distinct)} submitters, "
                f"{len(roles)} required",
            )
        fallback = distinct[: len(roles)]
        log.info("attestors_resolved_by_submission_order", attestors=fallback)
        return fallback

    async def _retrieve_artifacts(self, period_id: int) -> list[Path]:
        cached = self._payload_cache.get(period_id)
        if cached is not None and self._artifacts.all_present(cached):
            self._payload_cache.move_to_end(period_id)
            logger.debug("payload_cache_hit", period_id=period_id)
            return cached

        payloads: list[bytes] = []
        for address in await self._resolve_attestors(period_id):
            attestation = await self._ledger.get_attestation(period_id, address)
            if attestation is None:
                raise ArtifactMissingError(
                    f"ledger://periods/{period_id}/attestations/{address}",
                    "attestation not found on ledger",
                )
            logger.info(
                "attestation_retrieved",
                period_id=period_id,
                attestor=address,
                payload_bytes=len(attestation.payload),
            )
            payloads.append(attestation.payload)

        paths = self._artifacts.write_payloads(period_id, payloads)
        self._payload_cache[period_id] = paths
        self._payload_cache.move_to_end(period_id)
        while len(self._payload_cache) > self._config.payload_cache_size:
            evicted, _ = self._payload_cache.popitem(last=False)
            logger.debug("payload_cache_evicted", period_id=evicted)
        return paths
