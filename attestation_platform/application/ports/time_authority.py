"""Time Authority Protocol - interface for consistent timestamp provisioning.

Services that record timestamps (attestation submission, result
publication) inject a TimeAuthorityProtocol instead of calling
datetime.now() directly, so that tests can freeze and advance time.

For production:
    Use TimeAuthorityService from attestation_platform.application.services

For testing:
    Use FakeTimeAuthority from tests/helpers/fake_time_authority.py
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Abstract interface for time authority."""

    @abstractmethod
    def now(self) -> datetime:
        """Return current time with timezone awareness (UTC)."""
        ...

    @abstractmethod
    def monotonic(self) -> float:
        """Return monotonic clock value for measuring elapsed time.

        Only differences between values are meaningful.
        """
        ...
