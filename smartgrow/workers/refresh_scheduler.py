"""
Refresh Scheduler
=================
Background loop that asks the refresh coordinator for a new notification run
every ``interval_seconds`` (10 minutes by default).

A failing tick is logged and the loop keeps going; the coordinator already
retains the previous result and records the error.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from smartgrow.constants import Intervals
from smartgrow.enums.notifications import RefreshTrigger
from smartgrow.services.application.refresh_coordinator import RefreshCoordinator

logger = logging.getLogger(__name__)


class RefreshScheduler:
    """Single daemon thread driving periodic refreshes."""

    def __init__(
        self,
        coordinator: RefreshCoordinator,
        interval_seconds: float = Intervals.NOTIFICATION_REFRESH_DEFAULT,
        *,
        run_immediately: bool = True,
    ):
        """
        Args:
            coordinator: Coordinator whose ``refresh`` is invoked
            interval_seconds: Delay between ticks
            run_immediately: Fire a STARTUP refresh as soon as the loop starts
        """
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")
        self.coordinator = coordinator
        self.interval_seconds = interval_seconds
        self.run_immediately = run_immediately
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._running = False
        self.ticks = 0

    # ==================== Scheduler Control ====================

    def start(self) -> None:
        """Start the scheduler background thread."""
        if self._running:
            logger.warning("RefreshScheduler already running")
            return

        self._stop_event.clear()
        self._running = True
        self._thread = threading.Thread(
            target=self._run_loop,
            daemon=True,
            name="RefreshScheduler",
        )
        self._thread.start()
        logger.info("RefreshScheduler started (interval=%ss)", self.interval_seconds)

    def stop(self, wait: bool = True, timeout: float = Intervals.SCHEDULER_STOP_JOIN) -> None:
        """
        Stop the scheduler.

        Args:
            wait: Wait for the loop thread to finish
            timeout: Maximum wait time in seconds
        """
        if not self._running:
            return

        self._running = False
        self._stop_event.set()

        if wait and self._thread and self._thread is not threading.current_thread():
            self._thread.join(timeout=timeout)

        logger.info("RefreshScheduler stopped")

    def shutdown(self, wait: bool = True, timeout: float = Intervals.SCHEDULER_STOP_JOIN) -> None:
        """Alias for stop(); matches other services' shutdown() convention."""
        self.stop(wait=wait, timeout=timeout)

    def is_running(self) -> bool:
        return self._running

    def _run_loop(self) -> None:
        logger.debug("Refresh loop started")

        if self.run_immediately:
            self._tick(RefreshTrigger.STARTUP)

        while not self._stop_event.wait(self.interval_seconds):
            self._tick(RefreshTrigger.PERIODIC)

        logger.debug("Refresh loop ended")

    def _tick(self, trigger: RefreshTrigger) -> None:
        self.ticks += 1
        try:
            self.coordinator.refresh(trigger)
        except Exception as e:
            logger.error("Scheduled refresh (%s) failed: %s", trigger, e, exc_info=True)
