"""Controllable clock for deadline tests.

Cutoff behaviour is decided to the second, so tests pin "now" to exact
moments (10:00, exactly 17:00, 18:00) rather than reading the clock.

    >>> clock = FakeTimeAuthority(frozen_at=datetime(2026, 3, 2, 10, 0, tzinfo=timezone.utc))
    >>> service = AssignmentLifecycleService(repo, directory, clock)
    >>> clock.set_time(datetime(2026, 3, 2, 18, 0, tzinfo=timezone.utc))
    >>> await service.sweep_overdue()
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from assignflow.application.ports.time_authority import TimeAuthorityProtocol


def _aware(moment: datetime) -> datetime:
    return moment if moment.tzinfo is not None else moment.replace(tzinfo=timezone.utc)


class FakeTimeAuthority(TimeAuthorityProtocol):
    """Clock that stands still until a test moves it.

    ``advance`` moves wall and monotonic time together; ``set_time``
    jumps the wall clock only. Naive datetimes are read as UTC.
    """

    def __init__(self, frozen_at: datetime | None = None) -> None:
        self._wall = _aware(frozen_at or datetime(2026, 1, 1, tzinfo=timezone.utc))
        self._elapsed = 0.0

    def now(self) -> datetime:
        return self._wall

    def utcnow(self) -> datetime:
        return self._wall.astimezone(timezone.utc)

    def monotonic(self) -> float:
        return self._elapsed

    def advance(self, seconds: float = 0.0, *, delta: timedelta | None = None) -> None:
        step = delta.total_seconds() if delta is not None else float(seconds)
        if step < 0:
            raise ValueError("time only moves forward; use set_time() to jump back")
        self._wall += timedelta(seconds=step)
        self._elapsed += step

    def set_time(self, moment: datetime) -> None:
        self._wall = _aware(moment)

    def __repr__(self) -> str:
        return f"FakeTimeAuthority(now={self._wall.isoformat()})"
