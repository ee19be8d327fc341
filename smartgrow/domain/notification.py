"""
Notification Value Objects
==========================

Records produced by one evaluation run.

The externally visible ``id`` is opaque and time-derived; semantic identity
lives in :attr:`Notification.dedup_key`, which is built from the fields that
describe *what* was violated and never from the id.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, NamedTuple

from smartgrow.domain.thresholds import SystemThresholds, ThresholdRange
from smartgrow.enums.notifications import NotificationSeverity, NotificationType, SensorChannel


class DedupKey(NamedTuple):
    """Semantic identity of a violation."""

    type: NotificationType
    zone_id: str
    plant_id: str
    sensor: SensorChannel
    pin: int | None


@dataclass(frozen=True)
class Notification:
    """
    A single threshold violation or "no data" record.

    Every notification except the two "no data" variants satisfies
    ``value < threshold.min or value > threshold.max``.
    """

    id: str
    type: NotificationType
    severity: NotificationSeverity
    title: str
    message: str
    sensor: SensorChannel
    value: float
    threshold: ThresholdRange
    zone_id: str
    plant_id: str
    plant_name: str
    timestamp: datetime
    pin: int | None = None
    is_read: bool = False

    @property
    def dedup_key(self) -> DedupKey:
        return DedupKey(self.type, self.zone_id, self.plant_id, self.sensor, self.pin)

    @property
    def is_critical(self) -> bool:
        return self.severity == NotificationSeverity.CRITICAL

    def to_dict(self) -> dict[str, Any]:
        """Render the camelCase shape the mobile app consumes."""
        payload: dict[str, Any] = {
            "id": self.id,
            "type": self.type.value,
            "severity": self.severity.value,
            "title": self.title,
            "message": self.message,
            "sensor": self.sensor.value,
            "value": self.value,
            "threshold": self.threshold.to_dict(),
            "zoneId": self.zone_id,
            "plantId": self.plant_id,
            "plantName": self.plant_name,
            "timestamp": self.timestamp.isoformat(),
            "isRead": self.is_read,
        }
        if self.pin is not None:
            payload["pin"] = self.pin
        return payload


@dataclass(frozen=True)
class NotificationStats:
    """Summary counts, a pure fold over a notification list."""

    total: int = 0
    critical: int = 0
    warning: int = 0
    unread: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "critical": self.critical,
            "warning": self.warning,
            "unread": self.unread,
        }


@dataclass(frozen=True)
class NotificationRun:
    """
    Output of one evaluation cycle.

    Attributes:
        notifications: Deduplicated notifications, newest first
        stats: Counts folded over ``notifications``
        system_thresholds: Display defaults (fetched, or hardcoded on failure)
        thresholds_defaulted: True when the hardcoded defaults were substituted
        zone_errors: zone_id -> message for zones whose fetches failed
        started_at: Run start (aware UTC)
        completed_at: Run end (aware UTC)
    """

    notifications: tuple[Notification, ...]
    stats: NotificationStats
    system_thresholds: SystemThresholds
    started_at: datetime
    completed_at: datetime
    thresholds_defaulted: bool = False
    zone_errors: dict[str, str] = field(default_factory=dict)

    @property
    def duration_seconds(self) -> float:
        return (self.completed_at - self.started_at).total_seconds()
