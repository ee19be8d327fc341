"""
Notification Feed
=================
Presentation-side state layered over engine runs: read flags and dismissals.

The engine rebuilds every notification from scratch each cycle, with fresh
ids. Read and dismissed state is therefore tracked by dedup key so it carries
forward to the next cycle's equivalent notification. State for a key is
forgotten once that violation no longer appears in a run.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import datetime
from typing import Optional

from smartgrow.constants import FeedLimits
from smartgrow.domain.exceptions import NotFoundError
from smartgrow.domain.notification import DedupKey, Notification, NotificationRun, NotificationStats
from smartgrow.domain.thresholds import SystemThresholds
from smartgrow.services.application.stats_aggregator import aggregate

logger = logging.getLogger(__name__)


class NotificationFeed:
    """Thread-safe list the API serves; fed by ``apply(run)``."""

    def __init__(self, max_size: int = FeedLimits.MAX_NOTIFICATIONS):
        if max_size < 1:
            raise ValueError(f"max_size must be >= 1, got {max_size}")
        self.max_size = max_size
        self._lock = threading.RLock()
        self._items: list[Notification] = []
        self._read_keys: set[DedupKey] = set()
        self._dismissed_keys: set[DedupKey] = set()
        self._system_thresholds = SystemThresholds.defaults()
        self._applied_at: datetime | None = None

    # ==================== Updates ====================

    def apply(self, run: NotificationRun) -> None:
        """Replace the feed with ``run``'s notifications, keeping user state."""
        with self._lock:
            current_keys = {notification.dedup_key for notification in run.notifications}
            self._read_keys &= current_keys
            self._dismissed_keys &= current_keys

            items: list[Notification] = []
            for notification in run.notifications:
                key = notification.dedup_key
                if key in self._dismissed_keys:
                    continue
                if key in self._read_keys:
                    notification = replace(notification, is_read=True)
                items.append(notification)

            if len(items) > self.max_size:
                logger.debug("Feed truncated from %d to %d notifications", len(items), self.max_size)
            self._items = items[: self.max_size]
            self._system_thresholds = run.system_thresholds
            self._applied_at = run.completed_at

    def mark_as_read(self, notification_id: str) -> Notification:
        with self._lock:
            index = self._index_of(notification_id)
            updated = replace(self._items[index], is_read=True)
            self._items[index] = updated
            self._read_keys.add(updated.dedup_key)
            return updated

    def mark_all_as_read(self) -> int:
        """Mark every notification read; returns how many changed."""
        with self._lock:
            changed = 0
            for index, notification in enumerate(self._items):
                self._read_keys.add(notification.dedup_key)
                if not notification.is_read:
                    self._items[index] = replace(notification, is_read=True)
                    changed += 1
            return changed

    def dismiss(self, notification_id: str) -> None:
        with self._lock:
            index = self._index_of(notification_id)
            notification = self._items.pop(index)
            self._dismissed_keys.add(notification.dedup_key)

    def clear_all(self) -> int:
        """Empty the feed until the next run; returns how many were removed."""
        with self._lock:
            removed = len(self._items)
            self._items = []
            self._read_keys.clear()
            return removed

    # ==================== Reads ====================

    def notifications(self) -> list[Notification]:
        with self._lock:
            return list(self._items)

    def get(self, notification_id: str) -> Optional[Notification]:
        with self._lock:
            return next((n for n in self._items if n.id == notification_id), None)

    def stats(self) -> NotificationStats:
        with self._lock:
            return aggregate(self._items)

    def unread_count(self) -> int:
        return self.stats().unread

    @property
    def system_thresholds(self) -> SystemThresholds:
        return self._system_thresholds

    @property
    def applied_at(self) -> datetime | None:
        return self._applied_at

    def _index_of(self, notification_id: str) -> int:
        for index, notification in enumerate(self._items):
            if notification.id == notification_id:
                return index
        raise NotFoundError(f"Notification {notification_id} not found")
