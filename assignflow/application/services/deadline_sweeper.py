"""Deadline sweeper background service.

Runs ``AssignmentLifecycleService.sweep_overdue`` on a fixed period so
that same-day assignments still IN_PROGRESS at the cutoff become
INCOMPLETE without any user action.

Note:
    Start with the application lifecycle and stop on shutdown. Only one
    sweeper should be active against a given store.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Optional

import structlog

from assignflow.config.lifecycle_config import DEFAULT_SWEEP_INTERVAL_SECONDS
from assignflow.infrastructure.observability.correlation import correlation_scope

if TYPE_CHECKING:
    from assignflow.application.ports.time_authority import TimeAuthorityProtocol
    from assignflow.application.services.assignment_lifecycle_service import (
        AssignmentLifecycleService,
    )


class DeadlineSweeper:
    """Periodic driver for the overdue sweep.

    A failed tick is logged and the next tick still runs. ``stop()`` is
    graceful: no new tick starts, and a tick already running finishes
    its write before the loop exits.

    Attributes:
        running: Whether the sweeper loop is active.
        interval_seconds: Seconds between tick starts.

    Example:
        >>> sweeper = DeadlineSweeper(lifecycle_service, time_authority)
        >>> await sweeper.start()
        >>> # ... application runs ...
        >>> await sweeper.stop()
    """

    def __init__(
        self,
        lifecycle_service: AssignmentLifecycleService,
        time_authority: TimeAuthorityProtocol,
        interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
    ) -> None:
        """Initialize the sweeper.

        Args:
            lifecycle_service: Service whose sweep is invoked each tick.
            time_authority: Used to time ticks.
            interval_seconds: Period between tick starts.
        """
        self._lifecycle = lifecycle_service
        self._time = time_authority
        self._interval = interval_seconds
        self._running: bool = False
        self._stop_event = asyncio.Event()
        self._task: Optional[asyncio.Task[None]] = None
        self._log = structlog.get_logger().bind(service="deadline_sweeper")

    @property
    def running(self) -> bool:
        return self._running

    @property
    def interval_seconds(self) -> float:
        return self._interval

    async def start(self) -> None:
        """Start the sweep loop. Calling start while running is a no-op."""
        if self._running:
            return
        self._running = True
        self._stop_event.clear()
        self._task = asyncio.create_task(self._run_loop())
        self._log.info("deadline_sweeper_started", interval=self._interval)

    async def stop(self) -> None:
        """Stop the loop, letting an in-flight tick finish.

        Calling stop when not running is safe.
        """
        if not self._running and self._task is None:
            return
        self._running = False
        self._stop_event.set()
        if self._task:
            await self._task
            self._task = None
        self._log.info("deadline_sweeper_stopped")

    async def _run_loop(self) -> None:
        while self._running:
            start = self._time.monotonic()
            try:
                await self.run_once()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                self._log.error(
                    "sweep_tick_failed",
                    error=str(e),
                    error_type=type(e).__name__,
                )
            elapsed = self._time.monotonic() - start
            if await self._wait_for_stop(max(0.0, self._interval - elapsed)):
                break

    async def _wait_for_stop(self, timeout: float) -> bool:
        """Sleep up to ``timeout`` seconds; True if stop was requested."""
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=timeout)
        except asyncio.TimeoutError:
            return False
        return True

    async def run_once(self) -> int:
        """Run a single sweep tick.

        Returns:
            Number of assignments transitioned.
        """
        with correlation_scope() as correlation_id:
            count = await self._lifecycle.sweep_overdue()
            self._log.debug(
                "sweep_tick_complete",
                transitioned=count,
                correlation_id=correlation_id,
            )
        return count
