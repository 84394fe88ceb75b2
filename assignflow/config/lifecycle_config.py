"""Assignment lifecycle configuration.

Daily cutoff, business timezone and sweep cadence, with environment
variable overrides. Values are read once at startup into a frozen
config and never re-read while running.

Environment Variables:
- ASSIGNMENT_CUTOFF_HOUR: Hour of the daily cutoff (default: 17, min: 0, max: 23)
- ASSIGNMENT_CUTOFF_MINUTE: Minute of the daily cutoff (default: 0, min: 0, max: 59)
- ASSIGNMENT_SWEEP_INTERVAL_SECONDS: Seconds between sweeps (default: 60, min: 1, max: 3600)
- ASSIGNMENT_TIMEZONE: IANA zone the cutoff and "today" are evaluated in
  (default: "local", the host's own zone; set "UTC" to pin it)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import time, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable, falling back to ``default``."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _resolve_timezone(name: str) -> tzinfo | None:
    """Map a zone name to a tzinfo; ``None`` stands for the host's local zone."""
    if name.lower() == LOCAL_TIMEZONE:
        return None
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


# =============================================================================
# Cutoff Configuration
# =============================================================================

DEFAULT_CUTOFF_HOUR = 17
DEFAULT_CUTOFF_MINUTE = 0

# =============================================================================
# Sweep Configuration
# =============================================================================

DEFAULT_SWEEP_INTERVAL_SECONDS = 60
MIN_SWEEP_INTERVAL_SECONDS = 1
MAX_SWEEP_INTERVAL_SECONDS = 3600

LOCAL_TIMEZONE = "local"
DEFAULT_TIMEZONE = LOCAL_TIMEZONE


@dataclass(frozen=True)
class LifecycleConfig:
    """Configuration for deadline evaluation and the sweeper.

    Attributes:
        cutoff_hour: Hour (0-23) at which same-day deadlines lapse.
        cutoff_minute: Minute (0-59) of the cutoff.
        sweep_interval_seconds: Period of the deadline sweeper.
        timezone_name: IANA timezone for the cutoff and for "today", or
            "local" for whatever zone the host runs in.
    """

    cutoff_hour: int = DEFAULT_CUTOFF_HOUR
    cutoff_minute: int = DEFAULT_CUTOFF_MINUTE
    sweep_interval_seconds: int = DEFAULT_SWEEP_INTERVAL_SECONDS
    timezone_name: str = DEFAULT_TIMEZONE

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not 0 <= self.cutoff_hour <= 23:
            raise ValueError(
                f"cutoff_hour must be between 0 and 23, got {self.cutoff_hour}"
            )
        if not 0 <= self.cutoff_minute <= 59:
            raise ValueError(
                f"cutoff_minute must be between 0 and 59, got {self.cutoff_minute}"
            )
        if (
            not MIN_SWEEP_INTERVAL_SECONDS
            <= self.sweep_interval_seconds
            <= MAX_SWEEP_INTERVAL_SECONDS
        ):
            raise ValueError(
                f"sweep_interval_seconds must be between {MIN_SWEEP_INTERVAL_SECONDS} "
                f"and {MAX_SWEEP_INTERVAL_SECONDS}, got {self.sweep_interval_seconds}"
            )
        try:
            _resolve_timezone(self.timezone_name)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown timezone: {self.timezone_name!r}") from e

    @property
    def cutoff_time(self) -> time:
        """Daily cutoff as a naive wall-clock time."""
        return time(self.cutoff_hour, self.cutoff_minute)

    @property
    def business_timezone(self) -> tzinfo | None:
        """Business timezone; ``None`` means the host's local zone."""
        return _resolve_timezone(self.timezone_name)

    @property
    def sweep_interval(self) -> timedelta:
        return timedelta(seconds=self.sweep_interval_seconds)

    @classmethod
    def from_environment(cls) -> LifecycleConfig:
        """Create config from environment variables with defaults.

        Out-of-range integers are clamped; an unset or unknown timezone
        falls back to the host's local zone.

        Returns:
            LifecycleConfig with values from environment or defaults.
        """
        hour = max(0, min(_get_int_env("ASSIGNMENT_CUTOFF_HOUR", DEFAULT_CUTOFF_HOUR), 23))
        minute = max(
            0, min(_get_int_env("ASSIGNMENT_CUTOFF_MINUTE", DEFAULT_CUTOFF_MINUTE), 59)
        )
        interval = _get_int_env(
            "ASSIGNMENT_SWEEP_INTERVAL_SECONDS",
            DEFAULT_SWEEP_INTERVAL_SECONDS,
        )
        # Clamp to valid range
        interval = max(
            MIN_SWEEP_INTERVAL_SECONDS,
            min(interval, MAX_SWEEP_INTERVAL_SECONDS),
        )

        zone = os.environ.get("ASSIGNMENT_TIMEZONE", "").strip() or DEFAULT_TIMEZONE
        try:
            _resolve_timezone(zone)
        except (ZoneInfoNotFoundError, ValueError):
            zone = DEFAULT_TIMEZONE

        return cls(
            cutoff_hour=hour,
            cutoff_minute=minute,
            sweep_interval_seconds=interval,
            timezone_name=zone,
        )


# Pre-defined configurations

# Default production config (17:00 host-local cutoff, sweep every minute)
DEFAULT_LIFECYCLE_CONFIG = LifecycleConfig()

# Testing config with the fastest sweep cadence
TEST_LIFECYCLE_CONFIG = LifecycleConfig(
    sweep_interval_seconds=MIN_SWEEP_INTERVAL_SECONDS,
)
