"""In-memory implementation of LedgerStateProtocol.

Simulates the ledger store for development and tests:
- Registry kept in registration order
- Attestations keyed by (period_id, address), attestor lists per period
- Results keyed by period_id, rules in an append-only list

Writes that would overwrite existing entries raise, mirroring the ledger's
append-only guarantees; the Period Engine checks these conditions first so
they should never trigger in practice.

Thread-safety note: This stub is NOT thread-safe. It relies on the Period
Engine's serialized execution model (one event loop).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from attestation_platform.domain.models import (
        Attestation,
        Attestor,
        VerificationResult,
        VerificationRule,
    )


class InMemoryLedgerState:
    """In-memory ledger store."""

    def __init__(self, required_attestor_count: int = 2) -> None:
        """Initialize an empty ledger.

        Args:
            required_attestor_count: Quorum threshold, fixed for this ledger.
        """
        if required_attestor_count < 1:
            raise ValueError(
                f"required_attestor_count must be positive, got {required_attestor_count}"
            )
        self._required_attestor_count = required_attestor_count
        self._current_period_id = 0
        self._attestors: dict[str, Attestor] = {}
        self._attestor_order: list[str] = []
        # Key: (period_id, address), Value: Attestation
        self._attestations: dict[tuple[int, str], Attestation] = {}
        # Key: period_id, Value: addresses in submission order
        self._period_attestors: dict[int, list[str]] = {}
        self._quorum_signalled: set[int] = set()
        self._results: dict[int, VerificationResult] = {}
        self._rules: list[VerificationRule] = []

    @property
    def required_attestor_count(self) -> int:
        return self._required_attestor_count

    @property
    def current_period_id(self) -> int:
        return self._current_period_id

    def advance_period(self) -> int:
        self._current_period_id += 1
        return self._current_period_id

    def get_attestor(self, address: str) -> Attestor | None:
        return self._attestors.get(address)

    def add_attestor(self, attestor: Attestor) -> None:
        if attestor.address in self._attestors:
            raise KeyError(f"attestor {attestor.address} already stored")
        self._attestors[attestor.address] = attestor
        self._attestor_order.append(attestor.address)

    def list_attestors(self) -> list[Attestor]:
        return [self._attestors[address] for address in self._attestor_order]

    def get_attestation(self, period_id: int, address: str) -> Attestation | None:
        return self._attestations.get((period_id, address))

    def add_attestation(self, attestation: Attestation) -> int:
        key = (attestation.period_id, attestation.attestor)
        if key in self._attestations:
            raise KeyError(f"attestation {key} already stored")
        self._attestations[key] = attestation
        attestors = self._period_attestors.setdefault(attestation.period_id, [])
        attestors.append(attestation.attestor)
        return len(attestors)

    def list_period_attestors(self, period_id: int) -> list[str]:
        return list(self._period_attestors.get(period_id, []))

    def mark_quorum_signalled(self, period_id: int) -> bool:
        if period_id in self._quorum_signalled:
            return False
        self._quorum_signalled.add(period_id)
        return True

    def get_result(self, period_id: int) -> VerificationResult | None:
        return self._results.get(period_id)

    def put_result(self, result: VerificationResult) -> None:
        if result.period_id in self._results:
            raise KeyError(f"result for period {result.period_id} already stored")
        self._results[result.period_id] = result

    def append_rule(self, rule: VerificationRule) -> None:
        self._rules.append(rule)

    def list_rules(self) -> list[VerificationRule]:
        return list(self._rules)
