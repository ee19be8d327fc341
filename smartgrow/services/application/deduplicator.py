"""Collapses semantically identical notifications.

Builder-generated ids embed wall-clock time and are not stable identity keys,
so identity is computed from ``(type, zone_id, plant_id, sensor, pin)``.
"""

from __future__ import annotations

import logging
from typing import Iterable

from smartgrow.domain.notification import DedupKey, Notification

logger = logging.getLogger(__name__)


def dedupe(notifications: Iterable[Notification]) -> list[Notification]:
    """Keep the first occurrence of each dedup key, preserving input order."""
    seen: set[DedupKey] = set()
    unique: list[Notification] = []
    dropped = 0
    for notification in notifications:
        key = notification.dedup_key
        if key in seen:
            dropped += 1
            continue
        seen.add(key)
        unique.append(notification)
    if dropped:
        logger.debug("Dropped %d duplicate notification(s)", dropped)
    return unique
