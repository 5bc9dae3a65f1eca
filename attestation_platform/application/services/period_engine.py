"""Attestation Registry & Period Engine.

This is the authoritative state machine over the ledger state: attestor
registration, per-period attestation collection with quorum detection,
verification-result publication and period rollover.

Invariants:
- At most one Attestation per (period, attestor)
- A result for period P requires at least required_attestor_count
  distinct attestors for P
- A result, once published, is never overwritten
- required_attestor_count never changes after initialization
- The current period pointer only moves forward, one step at a time

Execution model:
Mutating calls are assumed to be totally ordered by the ledger. All methods
here are synchronous and do not await between their checks and their
writes, so within one event loop each call is applied atomically. The
engine itself performs no locking.

Developer Golden Rules:
1. CHECK AUTHORITY FIRST - Reject before touching state
2. FAIL LOUD - Every rejection is logged and raised, never swallowed
3. EDGE-TRIGGERED QUORUM - PeriodQuorumReached fires once per period
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from structlog import get_logger

from attestation_platform.domain.errors import (
    AlreadyRegisteredError,
    DuplicateSubmissionError,
    PeriodNotCompleteError,
    ResultAlreadyPublishedError,
    UnauthorizedError,
)
from attestation_platform.domain.events import (
    AttestationRecordedEvent,
    AttestorRegisteredEvent,
    PeriodAdvancedEvent,
    PeriodQuorumReachedEvent,
    VerificationPublishedEvent,
    VerificationRuleAddedEvent,
)
from attestation_platform.domain.models import (
    DEFAULT_MAX_PAYLOAD_BYTES,
    DEFAULT_MAX_PROOF_BYTES,
    Attestation,
    Attestor,
    PeriodSnapshot,
    SubmissionChannel,
    VerificationResult,
    VerificationRule,
    derive_period_status,
    normalize_identity,
    validate_blob,
    validate_label,
)

if TYPE_CHECKING:
    from attestation_platform.application.ports.event_publisher import (
        EventPublisherProtocol,
    )
    from attestation_platform.application.ports.ledger_state import (
        LedgerStateProtocol,
    )
    from attestation_platform.application.ports.time_authority import (
        TimeAuthorityProtocol,
    )

logger = get_logger(__name__)

ADMINISTRATOR_ROLE = "administrator"
ATTESTOR_ROLE = "attestor"


class PeriodEngine:
    """State machine for attestor registration and attestation periods.

    Example:
        >>> engine = PeriodEngine(
        ...     state=InMemoryLedgerState(required_attestor_count=2),
        ...     events=InMemoryEventBus(),
        ...     time_authority=TimeAuthorityService(),
        ...     admin_identity="0xadmin",
        ... )
        >>> engine.register_attestor("0xadmin", "0xexchange", "Exchange")
        >>> engine.submit_attestation("0xexchange", b"ciphertext")
    """

    def __init__(
        self,
        state: LedgerStateProtocol,
        events: EventPublisherProtocol,
        time_authority: TimeAuthorityProtocol,
        admin_identity: str,
        max_payload_bytes: int = DEFAULT_MAX_PAYLOAD_BYTES,
        max_proof_bytes: int = DEFAULT_MAX_PROOF_BYTES,
    ) -> None:
        """Initialize the engine.

        Args:
            state: Ledger store holding registry, periods, rules and results.
            events: Publisher for ledger events.
            time_authority: Source of submission and publication timestamps.
            admin_identity: The single designated administrator.
            max_payload_bytes: Size bound for attestation payloads.
            max_proof_bytes: Size bound for proof data.
        """
        self._state = state
        self._events = events
        self._time = time_authority
        self._admin = normalize_identity(admin_identity, "admin_identity")
        self._max_payload_bytes = max_payload_bytes
        self._max_proof_bytes = max_proof_bytes

    @property
    def admin_identity(self) -> str:
        return self._admin

    @property
    def required_attestor_count(self) -> int:
        return self._state.required_attestor_count

    @property
    def current_period_id(self) -> int:
        return self._state.current_period_id

    # ------------------------------------------------------------------
    # Mutating operations
    # ------------------------------------------------------------------

    def register_attestor(self, caller: str, address: str, name: str) -> Attestor:
        """Register an attestor identity (administrator only).

        Registration is permanent and does not affect in-flight periods.

        Raises:
            UnauthorizedError: Caller is not the administrator.
            AlreadyRegisteredError: Identity is already registered.
            InvalidPayloadError: Empty identity or name.
        """
        self._require_admin(caller, "register_attestor")
        address = normalize_identity(address, "address")
        name = validate_label(name, "name")
        log = logger.bind(address=address, attestor_name=name)

        if self._state.get_attestor(address) is not None:
            log.warning("attestor_registration_rejected", reason="already_registered")
            raise AlreadyRegisteredError(address)

        now = self._time.now()
        attestor = Attestor(address=address, name=name, registered_at=now)
        self._state.add_attestor(attestor)
        self._events.publish(
            AttestorRegisteredEvent(address=address, name=name, timestamp=now)
        )
        log.info("attestor_registered", attestor_count=len(self._state.list_attestors()))
        return attestor

    def submit_attestation(self, caller: str, payload: bytes) -> Attestation:
        """Submit the caller's attestation for the current period.

        Raises:
            UnauthorizedError: Caller is not a registered attestor.
            DuplicateSubmissionError: Caller already attested this period.
            InvalidPayloadError: Payload empty or oversized.
        """
        address = normalize_identity(caller, "caller")
        if self._state.get_attestor(address) is None:
            logger.warning(
                "attestation_rejected", caller=address, reason="not_registered"
            )
            raise UnauthorizedError(address, ATTESTOR_ROLE)
        return self._record_attestation(address, payload, SubmissionChannel.DIRECT)

    def submit_attestation_on_behalf(
        self, caller: str, address: str, payload: bytes
    ) -> Attestation:
        """Submit an attestation for a registered attestor (administrator only).

        Same duplicate and quorum semantics as a direct submission.

        Raises:
            UnauthorizedError: Caller is not the administrator, or the target
                identity is not a registered attestor.
            DuplicateSubmissionError: Target already attested this period.
            InvalidPayloadError: Payload empty or oversized.
        """
        self._require_admin(caller, "submit_attestation_on_behalf")
        address = normalize_identity(address, "address")
        if self._state.get_attestor(address) is None:
            logger.warning(
                "attestation_rejected",
                caller=self._admin,
                address=address,
                reason="target_not_registered",
            )
            raise UnauthorizedError(address, ATTESTOR_ROLE)
        return self._record_attestation(address, payload, SubmissionChannel.ON_BEHALF)

    def add_verification_rule(
        self, caller: str, description: str, rule_data: bytes
    ) -> VerificationRule:
        """Append a verification rule (administrator only).

        Returns:
            The stored rule, whose ``index`` is its position in the list.
        """
        self._require_admin(caller, "add_verification_rule")
        description = validate_label(description, "description")
        rule_data = validate_blob(rule_data, "rule_data", self._max_payload_bytes)

        index = len(self._state.list_rules())
        rule = VerificationRule(
            index=index,
            description=description,
            rule_data=rule_data,
            added_at=self._time.now(),
        )
        self._state.append_rule(rule)
        self._events.publish(
            VerificationRuleAddedEvent(index=index, description=description)
        )
        logger.info("verification_rule_added", index=index, description=description)
        return rule

    def publish_verification_result(
        self,
        caller: str,
        period_id: int,
        passed: bool,
        proof_data: bytes,
    ) -> VerificationResult:
        """Publish the verification result for a period (administrator only).

        Advances the current period pointer only when ``period_id`` is the
        current period. Publishing against an already superseded period is
        accepted and leaves the pointer where it is.

        Raises:
            UnauthorizedError: Caller is not the administrator.
            PeriodNotCompleteError: Fewer than required distinct attestors.
            ResultAlreadyPublishedError: A result already exists.
            InvalidPayloadError: Proof empty or oversized.
        """
        self._require_admin(caller, "publish_verification_result")
        proof_data = validate_blob(proof_data, "proof_data", self._max_proof_bytes)
        log = logger.bind(period_id=period_id, passed=passed)

        attestor_count = len(self._state.list_period_attestors(period_id))
        required = self._state.required_attestor_count
        if attestor_count < required:
            log.warning(
                "verification_rejected",
                reason="period_not_complete",
                attestor_count=attestor_count,
                required_count=required,
            )
            raise PeriodNotCompleteError(period_id, attestor_count, required)

        if self._state.get_result(period_id) is not None:
            log.warning("verification_rejected", reason="already_published")
            raise ResultAlreadyPublishedError(period_id)

        now = self._time.now()
        result = VerificationResult(
            period_id=period_id,
            passed=bool(passed),
            proof_data=proof_data,
            published_at=now,
        )
        self._state.put_result(result)
        self._events.publish(
            VerificationPublishedEvent(period_id=period_id, passed=result.passed, timestamp=now)
        )
        log.info("verification_published", proof_bytes=len(proof_data))

        if period_id == self._state.current_period_id:
            self._advance(forced=False)
        else:
            log.info(
                "verification_published_for_past_period",
                current_period_id=self._state.current_period_id,
            )
        return result

    def force_advance_period(self, caller: str) -> int:
        """Abandon the current period and move to the next (administrator only).

        Recorded attestations of the abandoned period are untouched and a
        result may still be published for it later.

        Returns:
            The new current period id.
        """
        self._require_admin(caller, "force_advance_period")
        return self._advance(forced=True)

    # ------------------------------------------------------------------
    # Read-only queries (pure, never raise for absent values)
    # ------------------------------------------------------------------

    def get_attestor(self, address: str) -> Attestor | None:
        try:
            return self._state.get_attestor(normalize_identity(address))
        except ValueError:
            return None

    def list_attestors(self) -> list[Attestor]:
        return self._state.list_attestors()

    def attestor_count(self) -> int:
        return len(self._state.list_attestors())

    def period_attestors(self, period_id: int) -> list[str]:
        return self._state.list_period_attestors(period_id)

    def period_attestor_count(self, period_id: int) -> int:
        return len(self._state.list_period_attestors(period_id))

    def rule_count(self) -> int:
        return len(self._state.list_rules())

    def list_rules(self) -> list[VerificationRule]:
        return self._state.list_rules()

    def get_rule(self, index: int) -> VerificationRule | None:
        rules = self._state.list_rules()
        if 0 <= index < len(rules):
            return rules[index]
        return None

    def get_attestation(self, period_id: int, address: str) -> Attestation | None:
        try:
            return self._state.get_attestation(period_id, normalize_identity(address))
        except ValueError:
            return None

    def get_verification_result(self, period_id: int) -> VerificationResult | None:
        return self._state.get_result(period_id)

    def period_snapshot(self, period_id: int) -> PeriodSnapshot:
        """Build the derived view of a period (never raises)."""
        attestors = self._state.list_period_attestors(period_id)
        result = self._state.get_result(period_id)
        required = self._state.required_attestor_count
        status = derive_period_status(
            period_id=period_id,
            current_period_id=self._state.current_period_id,
            attestor_count=len(attestors),
            required_count=required,
            has_result=result is not None,
        )
        return PeriodSnapshot(
            period_id=period_id,
            status=status,
            attestor_count=len(attestors),
            required_count=required,
            attestors=tuple(attestors),
            result=result,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_admin(self, caller: str, operation: str) -> None:
        try:
            normalized = normalize_identity(caller, "caller")
        except ValueError:
            normalized = str(caller)
        if normalized != self._admin:
            logger.warning(
                "privileged_call_rejected", caller=normalized, operation=operation
            )
            raise UnauthorizedError(normalized, ADMINISTRATOR_ROLE)

    def _record_attestation(
        self,
        address: str,
        payload: bytes,
        channel: SubmissionChannel,
    ) -> Attestation:
        payload = validate_blob(payload, "payload", self._max_payload_bytes)
        period_id = self._state.current_period_id
        log = logger.bind(period_id=period_id, attestor=address, channel=channel.value)

        if self._state.get_attestation(period_id, address) is not None:
            log.warning("attestation_rejected", reason="duplicate_submission")
            raise DuplicateSubmissionError(period_id, address)

        now = self._time.now()
        attestation = Attestation(
            period_id=period_id,
            attestor=address,
            payload=payload,
            submitted_at=now,
            channel=channel,
        )
        count = self._state.add_attestation(attestation)
        self._events.publish(
            AttestationRecordedEvent(period_id=period_id, attestor=address, timestamp=now)
        )
        log.info(
            "attestation_recorded",
            attestor_count=count,
            payload_bytes=len(payload),
            payload_hash=attestation.payload_hash,
        )

        required = self._state.required_attestor_count
        if count >= required and self._state.mark_quorum_signalled(period_id):
            self._events.publish(
                PeriodQuorumReachedEvent(period_id=period_id, attestor_count=count)
            )
            log.info("period_quorum_reached", attestor_count=count, required_count=required)
        return attestation

    def _advance(self, forced: bool) -> int:
        previous = self._state.current_period_id
        current = self._state.advance_period()
        self._events.publish(
            PeriodAdvancedEvent(
                previous_period_id=previous,
                current_period_id=current,
                forced=forced,
            )
        )
        if forced:
            logger.warning(
                "period_force_advanced",
                abandoned_period_id=previous,
                attestor_count=len(self._state.list_period_attestors(previous)),
                current_period_id=current,
            )
        else:
            logger.info("period_advanced", previous_period_id=previous, current_period_id=current)
        return current
