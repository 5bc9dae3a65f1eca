"""Attestor model.

An attestor is a party authorized to submit encrypted commitments. The
identity is immutable once registered and registration is permanent.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, eq=True)
class Attestor:
    """A registered attestor.

    Attributes:
        address: Normalized identity (lower-case ledger address).
        name: Display name, also used as the role name by the orchestrator.
        registered_at: When the registration was recorded.
    """

    address: str
    name: str
    registered_at: datetime

    @property
    def registered(self) -> bool:
        """Registered attestors exist only in the registry."""
        return True

    def to_dict(self) -> dict[str, str | bool]:
        return {
            "address": self.address,
            "name": self.name,
            "registered": self.registered,
            "registered_at": self.registered_at.isoformat(),
        }
