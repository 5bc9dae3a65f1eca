"""Verification rules and results."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

import blake3


@dataclass(frozen=True, eq=True)
class VerificationRule:
    """An append-only verification rule, referenced by its index.

    Attributes:
        index: Position in the rule list (0-based, never reused).
        description: Human-readable rule, e.g. "Reserves > Liabilities".
        rule_data: Opaque machine-readable rule encoding.
        added_at: When the rule was appended.
    """

    index: int
    description: str
    rule_data: bytes
    added_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "description": self.description,
            "rule_data": "0x" + self.rule_data.hex(),
            "added_at": self.added_at.isoformat(),
        }


@dataclass(frozen=True, eq=True)
class VerificationResult:
    """Published pass/fail outcome for a period. Immutable once recorded.

    Attributes:
        period_id: Period the result belongs to.
        passed: Whether the verified relation holds.
        proof_data: Opaque proof bytes from the proving collaborator.
        published_at: When the ledger recorded the result.
    """

    period_id: int
    passed: bool
    proof_data: bytes
    published_at: datetime

    @property
    def proof_hash(self) -> str:
        return blake3.blake3(self.proof_data).hexdigest()

    def to_dict(self) -> dict[str, Any]:
        return {
            "period_id": self.period_id,
            "passed": self.passed,
            "proof_data": "0x" + self.proof_data.hex(),
            "proof_hash": self.proof_hash,
            "published_at": self.published_at.isoformat(),
        }
