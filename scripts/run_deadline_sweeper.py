#!/usr/bin/env python3
"""Run the deadline sweeper as a standalone process.

Use this when the API runs with ASSIGNMENT_SWEEPER_ENABLED=false, or to
settle overdue assignments by hand. Only one sweeper should run against
a given database.

Usage:
    python scripts/run_deadline_sweeper.py
    python scripts/run_deadline_sweeper.py --once
    python scripts/run_deadline_sweeper.py --interval 30 -v
"""

from __future__ import annotations

import argparse
import asyncio
import signal
import sys

from dotenv import load_dotenv
from structlog import get_logger

from assignflow.application.services.deadline_sweeper import DeadlineSweeper
from assignflow.bootstrap.assignments import (
    build_lifecycle_service,
    get_time_authority,
)
from assignflow.bootstrap.database import close_database_engine
from assignflow.bootstrap.logging import configure_structlog

logger = get_logger()


async def run(args: argparse.Namespace) -> int:
    service = build_lifecycle_service()
    sweeper = DeadlineSweeper(
        lifecycle_service=service,
        time_authority=get_time_authority(),
        interval_seconds=args.interval or service.config.sweep_interval_seconds,
    )
    try:
        if args.once:
            count = await sweeper.run_once()
            logger.info("deadline_sweep_once_completed", transitioned=count)
            return 0

        stop_requested = asyncio.Event()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, stop_requested.set)

        await sweeper.start()
        await stop_requested.wait()
        await sweeper.stop()
        return 0
    finally:
        await close_database_engine()


def main() -> int:
    parser = argparse.ArgumentParser(description="Assignment deadline sweeper")
    parser.add_argument("--once", action="store_true", help="Run a single sweep and exit")
    parser.add_argument(
        "--interval",
        type=int,
        default=None,
        help="Seconds between sweeps (default: ASSIGNMENT_SWEEP_INTERVAL_SECONDS)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Console log output")
    args = parser.parse_args()

    load_dotenv()
    configure_structlog("development" if args.verbose else None)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
