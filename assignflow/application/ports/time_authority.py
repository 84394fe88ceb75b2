"""Time authority port.

Deadline handling compares "now" against a daily cutoff, so services
read time from an injected TimeAuthorityProtocol and never from the
system clock. ``scripts/check_no_datetime_now.py`` enforces this.
Tests inject ``tests/helpers/fake_time_authority.FakeTimeAuthority``.
"""

from abc import ABC, abstractmethod
from datetime import datetime, tzinfo


class TimeAuthorityProtocol(ABC):
    """Source of wall-clock and monotonic time.

    Example:
        class Sweeper:
            def __init__(self, time_authority: TimeAuthorityProtocol) -> None:
                self._time = time_authority

            def local_today(self, zone: tzinfo) -> date:
                return self._time.now_in(zone).date()
    """

    @abstractmethod
    def now(self) -> datetime:
        """Current instant, timezone-aware."""
        ...

    @abstractmethod
    def utcnow(self) -> datetime:
        """Current instant in UTC, timezone-aware."""
        ...

    @abstractmethod
    def monotonic(self) -> float:
        """Seconds on a clock that never goes backwards.

        Only differences between readings are meaningful; use it to time
        sweep ticks, never as a timestamp.
        """
        ...

    def now_in(self, zone: tzinfo | None) -> datetime:
        """Current instant expressed in ``zone``; ``None`` is the host's local zone."""
        return self.now().astimezone(zone)
