"""Summary counts over a notification list."""

from __future__ import annotations

from typing import Iterable

from smartgrow.domain.notification import Notification, NotificationStats
from smartgrow.enums.notifications import NotificationSeverity


def aggregate(notifications: Iterable[Notification]) -> NotificationStats:
    total = critical = warning = unread = 0
    for notification in notifications:
        total += 1
        if notification.severity == NotificationSeverity.CRITICAL:
            critical += 1
        elif notification.severity == NotificationSeverity.WARNING:
            warning += 1
        if not notification.is_read:
            unread += 1
    return NotificationStats(total=total, critical=critical, warning=warning, unread=unread)
