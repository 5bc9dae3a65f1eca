"""FakeTimeAuthority - controllable time authority for deterministic tests.

Usage:
    >>> fake_time = FakeTimeAuthority(frozen_at=datetime(2026, 1, 15, 10, 0, tzinfo=timezone.utc))
    >>> engine = PeriodEngine(..., time_authority=fake_time)
    >>> fake_time.advance(seconds=3600)  # submissions are now stamped 11:00

The monotonic clock moves together with advance().
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from attestation_platform.application.ports.time_authority import (
    TimeAuthorityProtocol,
)


class FakeTimeAuthority(TimeAuthorityProtocol):
    """Time authority whose clock only moves when a test moves it."""

    def __init__(
        self,
        frozen_at: datetime | None = None,
        *,
        start_monotonic: float = 0.0,
    ) -> None:
        """Initialize the fake time authority.

        Args:
            frozen_at: Time to freeze at, 2026-01-01T00:00:00 UTC if omitted.
                Naive datetimes are taken as UTC.
            start_monotonic: Starting value for the monotonic clock.
        """
        if frozen_at is None:
            frozen_at = datetime(2026, 1, 1, 0, 0, 0, tzinfo=timezone.utc)
        if frozen_at.tzinfo is None:
            frozen_at = frozen_at.replace(tzinfo=timezone.utc)

        self._current_time: datetime = frozen_at
        self._monotonic_base: float = start_monotonic
        self._monotonic_advances: float = 0.0

    def now(self) -> datetime:
        return self._current_time

    def monotonic(self) -> float:
        return self._monotonic_base + self._monotonic_advances

    def advance(
        self,
        seconds: float | int | None = None,
        delta: timedelta | None = None,
    ) -> None:
        """Advance time by ``delta`` or ``seconds``.

        Raises:
            ValueError: If neither is provided, or the amount is negative.
        """
        if delta is not None:
            advance_seconds = delta.total_seconds()
        elif seconds is not None:
            advance_seconds = float(seconds)
        else:
            raise ValueError("Must provide either 'seconds' or 'delta' argument")

        if advance_seconds < 0:
            raise ValueError(
                f"Cannot advance time backwards. Got {advance_seconds} seconds."
            )

        self._current_time += timedelta(seconds=advance_seconds)
        self._monotonic_advances += advance_seconds

    def set_time(self, new_time: datetime) -> None:
        """Jump to ``new_time`` (may move backwards; monotonic is unaffected)."""
        if new_time.tzinfo is None:
            new_time = new_time.replace(tzinfo=timezone.utc)
        self._current_time = new_time
