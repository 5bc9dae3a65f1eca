"""Production time authority backed by the system clock."""

from __future__ import annotations

import time
from datetime import datetime, timezone

from attestation_platform.application.ports.time_authority import (
    TimeAuthorityProtocol,
)


class TimeAuthorityService(TimeAuthorityProtocol):
    """System clock implementation of TimeAuthorityProtocol.

    Always returns timezone-aware UTC datetimes.
    """

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def monotonic(self) -> float:
        return time.monotonic()
