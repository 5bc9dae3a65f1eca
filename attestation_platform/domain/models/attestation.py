"""Attestation model.

One attestation exists per (period, attestor) pair. It is created exactly
once and never modified afterwards. "Not yet submitted" is represented by
the absence of an Attestation, never by a zero timestamp.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

import blake3


class SubmissionChannel(Enum):
    """How the attestation reached the ledger."""

    DIRECT = "direct"
    ON_BEHALF = "on_behalf"


@dataclass(frozen=True, eq=True)
class Attestation:
    """An encrypted commitment submitted by an attestor for a period.

    Attributes:
        period_id: Period the attestation belongs to.
        attestor: Normalized identity of the attestor.
        payload: Opaque encrypted commitment bytes.
        submitted_at: When the ledger recorded the submission.
        channel: Whether the attestor submitted directly or the
            administrator submitted on its behalf.
    """

    period_id: int
    attestor: str
    payload: bytes
    submitted_at: datetime
    channel: SubmissionChannel = SubmissionChannel.DIRECT

    @property
    def payload_hash(self) -> str:
        """BLAKE3 hex digest of the payload, for logs and receipts."""
        return blake3.blake3(self.payload).hexdigest()

    def to_dict(self) -> dict[str, Any]:
        return {
            "period_id": self.period_id,
            "attestor": self.attestor,
            "payload": "0x" + self.payload.hex(),
            "payload_hash": self.payload_hash,
            "submitted_at": self.submitted_at.isoformat(),
            "channel": self.channel.value,
        }
