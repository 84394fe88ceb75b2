#!/usr/bin/env python3
"""Fail when code under assignflow/ reads the system clock directly.

Cutoff decisions must be reproducible in tests, so "now" comes from an
injected TimeAuthorityProtocol. SystemTimeAuthority is the one place
allowed to call the clock.

Usage:
    python scripts/check_no_datetime_now.py [package_dir]

Exits 1 when any direct read is found.
"""

import re
import sys
from pathlib import Path

CLOCK_READ = re.compile(r"\b(?:datetime\s*\.\s*(?:now|utcnow|today)|date\s*\.\s*today)\s*\(")
EXEMPT = frozenset({"application/services/system_time_authority.py"})


def check_file(file_path: Path) -> list[tuple[int, str]]:
    """Return (line number, line) for every direct clock read outside comments."""
    hits: list[tuple[int, str]] = []
    for number, line in enumerate(file_path.read_text(encoding="utf-8").splitlines(), 1):
        code = line.split("#", 1)[0]
        if CLOCK_READ.search(code):
            hits.append((number, line.strip()))
    return hits


def main(package_dir: str = "assignflow") -> int:
    root = Path(package_dir)
    if not root.is_dir():
        print(f"{root}/ not found, nothing to check")
        return 0

    findings = {
        path: hits
        for path in sorted(root.rglob("*.py"))
        if path.relative_to(root).as_posix() not in EXEMPT
        and (hits := check_file(path))
    }
    if not findings:
        print(f"No direct clock reads in {root}/")
        return 0

    print("Direct clock reads found; inject TimeAuthorityProtocol instead:")
    for path, hits in findings.items():
        for number, line in hits:
            print(f"  {path}:{number}: {line}")
    return 1


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
