"""Attestor-side submission round.

Drives one end-to-end submission round for operators:
  1. Ensure the shared key pair exists
  2. Encrypt each party's plaintext value into a payload artifact
  3. Register the parties under their role names if the registry is empty
  4. Submit each payload unless the party already attested this period
  5. Report whether the period reached quorum

The proof itself is produced later by the proof worker reacting to the
quorum event.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from structlog import get_logger

from attestation_platform.domain.errors import (
    ArtifactMissingError,
    DuplicateSubmissionError,
)
from attestation_platform.domain.models import normalize_identity

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

logger = get_logger(__name__)


@dataclass(frozen=True)
class AttestorAccount:
    """A party taking part in the round.

    Attributes:
        role: Role name, used as the attestor name on registration.
        address: Ledger identity of the party.
        value: Plaintext value to commit (reserves or liabilities).
    """

    role: str
    address: str
    value: int


@dataclass(frozen=True)
class FlowReport:
    """Outcome of a submission round."""

    period_id: int
    submitted: tuple[str, ...]
    skipped: tuple[str, ...]
    attestor_count: int
    required_count: int

    @property
    def quorum_reached(self) -> bool:
        return self.attestor_count >= self.required_count


class AttestationFlowService:
    """Creates and submits encrypted attestations for a set of parties."""

    def __init__(
        self,
        ledger: AttestationLedgerProtocol,
        encryptor: EncryptionEngineProtocol,
        artifact_store: ArtifactStoreProtocol,
        key_size_bits: int = 1024,
        submit_on_behalf: bool = True,
    ) -> None:
        """Initialize the flow.

        Args:
            ledger: Ledger API.
            encryptor: Encryption collaborator.
            artifact_store: Location of keys and payload artifacts.
            key_size_bits: Key size used when keys must be generated.
            submit_on_behalf: Submit through the operator instead of as
                each party (for parties without transaction authority).
        """
        self._ledger = ledger
        self._encryptor = encryptor
        self._artifacts = artifact_store
        self._key_size_bits = key_size_bits
        self._submit_on_behalf = submit_on_behalf

    async def run(self, accounts: Sequence[AttestorAccount]) -> FlowReport:
        """Execute one submission round for ``accounts``."""
        if not accounts:
            raise ValueError("at least one attestor account is required")
        accounts = [
            AttestorAccount(a.role, normalize_identity(a.address, "address"), a.value)
            for a in accounts
        ]

        self._artifacts.ensure_directories()
        await self._ensure_keys()
        payloads = await self._create_payloads(accounts)
        await self._ensure_registered(accounts)

        period_id = await self._ledger.current_period_id()
        already = set(await self._ledger.period_attestors(period_id))
        log = logger.bind(period_id=period_id)

        submitted: list[str] = []
        skipped: list[str] = []
        for account, payload in zip(accounts, payloads):
            if account.address in already:
                log.info("attestation_already_submitted", role=account.role)
                skipped.append(account.address)
                continue
            try:
                if self._submit_on_behalf:
                    await self._ledger.submit_attestation_on_behalf(account.address, payload)
                else:
                    await self._ledger.submit_attestation(account.address, payload)
            except DuplicateSubmissionError:
                log.info("attestation_already_submitted", role=account.role)
                skipped.append(account.address)
                continue
            log.info(
                "attestation_submitted",
                role=account.role,
                attestor=account.address,
                payload_bytes=len(payload),
                on_behalf=self._submit_on_behalf,
            )
            submitted.append(account.address)

        report = FlowReport(
            period_id=period_id,
            submitted=tuple(submitted),
            skipped=tuple(skipped),
            attestor_count=await self._ledger.period_attestor_count(period_id),
            required_count=await self._ledger.required_attestor_count(),
        )
        log.info(
            "attestation_round_finished",
            attestor_count=report.attestor_count,
            required_count=report.required_count,
            quorum_reached=report.quorum_reached,
        )
        return report

    async def _ensure_keys(self) -> None:
        if self._artifacts.public_key_path.is_file():
            logger.info("shared_keys_reused", path=str(self._artifacts.public_key_path))
            return
        logger.info("shared_keys_generating", key_size_bits=self._key_size_bits)
        await self._encryptor.generate_keys(self._artifacts.keys_dir, self._key_size_bits)
        if not self._artifacts.public_key_path.is_file():
            raise ArtifactMissingError(
                self._artifacts.public_key_path, "key generation produced no public key"
            )

    async def _create_payloads(self, accounts: Sequence[AttestorAccount]) -> list[bytes]:
        payloads: list[bytes] = []
        for node_index, account in enumerate(accounts, start=1):
            output = self._artifacts.attestations_dir / f"attestation_{node_index}.bin"
            payload = await self._encryptor.encrypt_value(
                node_index, self._artifacts.public_key_path, account.value, output
            )
            logger.info(
                "attestation_payload_created",
                role=account.role,
                node_index=node_index,
                payload_bytes=len(payload),
            )
            payloads.append(payload)
        return payloads

    async def _ensure_registered(self, accounts: Sequence[AttestorAccount]) -> None:
        registered = await self._ledger.list_attestors()
        if registered:
            logger.info("attestors_already_registered", attestor_count=len(registered))
            return
        for account in accounts:
            await self._ledger.register_attestor(account.address, account.role)
            logger.info("attestor_registered", role=account.role, address=account.address)
