"""Tests for the direct-clock-read lint script."""

from pathlib import Path

import pytest

from scripts.check_no_datetime_now import check_file, main

PROJECT_ROOT = Path(__file__).resolve().parents[3]


def test_flags_direct_clock_reads(tmp_path: Path) -> None:
    source = tmp_path / "module.py"
    source.write_text(
        "from datetime import date, datetime\n"
        "# datetime.now() in a comment is fine\n"
        "a = datetime.now()\n"
        "b = date.today()\n"
        "c = self._time.now()\n"
    )

    violations = check_file(source)

    assert [line for line, _ in violations] == [3, 4]


def test_package_has_no_violations(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(PROJECT_ROOT)

    assert main() == 0
