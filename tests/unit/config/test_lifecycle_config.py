"""Unit tests for LifecycleConfig."""

from collections.abc import Callable
from datetime import datetime, time, timedelta, timezone

import pytest

from assignflow.config.lifecycle_config import (
    DEFAULT_LIFECYCLE_CONFIG,
    LOCAL_TIMEZONE,
    MAX_SWEEP_INTERVAL_SECONDS,
    MIN_SWEEP_INTERVAL_SECONDS,
    TEST_LIFECYCLE_CONFIG,
    LifecycleConfig,
)
from tests.helpers.fake_time_authority import FakeTimeAuthority


class TestLifecycleConfigDefaults:
    def test_default_cutoff_is_five_pm(self) -> None:
        assert DEFAULT_LIFECYCLE_CONFIG.cutoff_time == time(17, 0)

    def test_default_sweep_every_minute(self) -> None:
        assert DEFAULT_LIFECYCLE_CONFIG.sweep_interval_seconds == 60
        assert DEFAULT_LIFECYCLE_CONFIG.sweep_interval == timedelta(minutes=1)

    def test_default_timezone_is_host_local(self) -> None:
        assert DEFAULT_LIFECYCLE_CONFIG.timezone_name == LOCAL_TIMEZONE
        assert DEFAULT_LIFECYCLE_CONFIG.business_timezone is None

    def test_utc_can_be_pinned(self) -> None:
        assert LifecycleConfig(timezone_name="UTC").business_timezone is timezone.utc

    def test_test_config_sweeps_fast(self) -> None:
        assert TEST_LIFECYCLE_CONFIG.sweep_interval_seconds == MIN_SWEEP_INTERVAL_SECONDS


class TestLifecycleConfigValidation:
    def test_rejects_bad_hour(self) -> None:
        with pytest.raises(ValueError, match="cutoff_hour"):
            LifecycleConfig(cutoff_hour=24)

    def test_rejects_bad_minute(self) -> None:
        with pytest.raises(ValueError, match="cutoff_minute"):
            LifecycleConfig(cutoff_minute=60)

    def test_rejects_zero_interval(self) -> None:
        with pytest.raises(ValueError, match="sweep_interval_seconds"):
            LifecycleConfig(sweep_interval_seconds=0)

    def test_rejects_unknown_timezone(self) -> None:
        with pytest.raises(ValueError, match="unknown timezone"):
            LifecycleConfig(timezone_name="Mars/Olympus_Mons")

    def test_accepts_iana_zone(self) -> None:
        config = LifecycleConfig(timezone_name="Asia/Kolkata")
        assert str(config.business_timezone) == "Asia/Kolkata"


class TestLifecycleConfigFromEnvironment:
    def test_defaults_without_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for key in (
            "ASSIGNMENT_CUTOFF_HOUR",
            "ASSIGNMENT_CUTOFF_MINUTE",
            "ASSIGNMENT_SWEEP_INTERVAL_SECONDS",
            "ASSIGNMENT_TIMEZONE",
        ):
            monkeypatch.delenv(key, raising=False)

        assert LifecycleConfig.from_environment() == LifecycleConfig()

    def test_reads_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ASSIGNMENT_CUTOFF_HOUR", "18")
        monkeypatch.setenv("ASSIGNMENT_CUTOFF_MINUTE", "30")
        monkeypatch.setenv("ASSIGNMENT_SWEEP_INTERVAL_SECONDS", "15")
        monkeypatch.setenv("ASSIGNMENT_TIMEZONE", "Europe/Berlin")

        config = LifecycleConfig.from_environment()

        assert config.cutoff_time == time(18, 30)
        assert config.sweep_interval_seconds == 15
        assert config.timezone_name == "Europe/Berlin"

    def test_clamps_out_of_range(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ASSIGNMENT_CUTOFF_HOUR", "99")
        monkeypatch.setenv("ASSIGNMENT_SWEEP_INTERVAL_SECONDS", "999999")

        config = LifecycleConfig.from_environment()

        assert config.cutoff_hour == 23
        assert config.sweep_interval_seconds == MAX_SWEEP_INTERVAL_SECONDS

    def test_ignores_garbage(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ASSIGNMENT_CUTOFF_HOUR", "five")
        monkeypatch.setenv("ASSIGNMENT_TIMEZONE", "Not/AZone")

        config = LifecycleConfig.from_environment()

        assert config.cutoff_hour == 17
        assert config.timezone_name == LOCAL_TIMEZONE

    def test_blank_timezone_means_host_local(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ASSIGNMENT_TIMEZONE", "  ")

        assert LifecycleConfig.from_environment().timezone_name == LOCAL_TIMEZONE

    def test_unset_timezone_follows_host_zone(
        self,
        monkeypatch: pytest.MonkeyPatch,
        host_timezone: Callable[[str], None],
    ) -> None:
        monkeypatch.delenv("ASSIGNMENT_TIMEZONE", raising=False)
        host_timezone("BTT-6")
        clock = FakeTimeAuthority(frozen_at=datetime(2026, 3, 2, 11, 30, tzinfo=timezone.utc))

        config = LifecycleConfig.from_environment()
        local_now = clock.now_in(config.business_timezone)

        assert local_now.utcoffset() == timedelta(hours=6)
        assert local_now.time() == time(17, 30)
