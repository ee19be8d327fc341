"""
Refresh Coordinator
===================
Owns the "when" of evaluation: runs the engine on demand, publishes the result
to listeners and keeps the last good run for readers.

Each refresh is stamped with a monotonically increasing generation. A run that
completes after a newer one has started is discarded whole; results are never
partially merged. A failed refresh keeps the previous result and records the
error so the UI can show a "failed to refresh" state.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

from smartgrow.domain.notification import NotificationRun
from smartgrow.enums.notifications import RefreshTrigger
from smartgrow.services.application.notification_engine import NotificationEngine
from smartgrow.utils.time import utc_now

logger = logging.getLogger(__name__)

RunListener = Callable[[NotificationRun], None]


@dataclass(frozen=True)
class RefreshStatus:
    last_refreshed_at: datetime | None
    last_trigger: RefreshTrigger | None
    generation: int
    refreshing: bool
    error: str | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "last_refreshed_at": self.last_refreshed_at.isoformat() if self.last_refreshed_at else None,
            "last_trigger": str(self.last_trigger) if self.last_trigger else None,
            "generation": self.generation,
            "refreshing": self.refreshing,
            "error": self.error,
        }


class RefreshCoordinator:
    """Runs the engine and publishes accepted runs to subscribers."""

    def __init__(self, engine: NotificationEngine, clock: Callable[[], datetime] = utc_now):
        self.engine = engine
        self.clock = clock
        self._lock = threading.Lock()
        # Serialises listener delivery; reentrant so a listener may trigger a refresh
        self._publish_lock = threading.RLock()
        self._listeners: list[RunListener] = []
        self._generation = 0
        self._in_flight = 0
        self._latest: Optional[NotificationRun] = None
        self._last_refreshed_at: datetime | None = None
        self._last_trigger: RefreshTrigger | None = None
        self._last_error: str | None = None

    @property
    def latest(self) -> Optional[NotificationRun]:
        """Last accepted run, or None before the first success."""
        return self._latest

    @property
    def last_error(self) -> str | None:
        return self._last_error

    def subscribe(self, listener: RunListener) -> Callable[[], None]:
        """
        Register a listener called with every accepted run.

        Returns:
            Callable that removes the listener
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                try:
                    self._listeners.remove(listener)
                except ValueError:
                    return

        return unsubscribe

    def refresh(self, trigger: RefreshTrigger = RefreshTrigger.MANUAL) -> Optional[NotificationRun]:
        """
        Run the engine once.

        Args:
            trigger: What initiated the refresh

        Returns:
            The run if it was accepted and delivered, None if a newer refresh
            superseded it before or during delivery to listeners

        Raises:
            Whatever the engine raised, after recording it as ``last_error``
            (unless superseded). The previous result is retained.
        """
        with self._lock:
            self._generation += 1
            generation = self._generation
            self._in_flight += 1
        logger.info("Refresh #%d started (trigger=%s)", generation, trigger)

        try:
            run = self.engine.run()
        except Exception as e:
            with self._lock:
                self._in_flight -= 1
                superseded = generation < self._generation
                if not superseded:
                    self._last_error = str(e) or e.__class__.__name__
                    self._last_trigger = trigger
            if superseded:
                logger.info("Refresh #%d failed after being superseded: %s", generation, e)
            else:
                logger.warning("Refresh #%d failed, keeping previous result: %s", generation, e)
            raise

        with self._lock:
            self._in_flight -= 1
            if generation < self._generation:
                logger.info("Discarding refresh #%d: superseded by #%d", generation, self._generation)
                return None
            self._latest = run
            self._last_refreshed_at = self.clock()
            self._last_trigger = trigger
            self._last_error = None
            listeners = list(self._listeners)

        with self._publish_lock:
            for listener in listeners:
                if not self._is_latest(run):
                    logger.info("Refresh #%d superseded during publication, stopping delivery", generation)
                    return None
                try:
                    listener(run)
                except Exception as e:
                    logger.error("Refresh listener %r failed: %s", listener, e, exc_info=True)

        logger.info(
            "Refresh #%d accepted: %d notifications in %.2fs",
            generation,
            run.stats.total,
            run.duration_seconds,
        )
        return run

    def _is_latest(self, run: NotificationRun) -> bool:
        with self._lock:
            return self._latest is run

    def status(self) -> RefreshStatus:
        with self._lock:
            return RefreshStatus(
                last_refreshed_at=self._last_refreshed_at,
                last_trigger=self._last_trigger,
                generation=self._generation,
                refreshing=self._in_flight > 0,
                error=self._last_error,
            )
