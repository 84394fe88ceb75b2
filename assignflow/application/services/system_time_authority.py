"""Production time authority backed by the system clock."""

import time
from datetime import datetime, timezone

from assignflow.application.ports.time_authority import TimeAuthorityProtocol


class SystemTimeAuthority(TimeAuthorityProtocol):
    """Reads wall-clock and monotonic time from the operating system.

    ``now()`` returns UTC; the lifecycle service converts to the
    configured business timezone itself.
    """

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def utcnow(self) -> datetime:
        return datetime.now(timezone.utc)

    def monotonic(self) -> float:
        return time.monotonic()
