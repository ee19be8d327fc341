"""
Notification Builder
====================
Pure constructors for violation and "no data" notifications.

Given identical inputs every builder returns an identical notification except
for the opaque ``id``, which embeds the wall-clock time of generation and is
therefore never used for identity (see ``deduplicator``).
"""

from __future__ import annotations

import secrets
from datetime import datetime
from typing import Callable

from smartgrow.constants import NO_DATA_RANGE, SENSOR_DISPLAY
from smartgrow.domain.notification import DedupKey, Notification
from smartgrow.domain.plant import Plant, Zone
from smartgrow.domain.thresholds import ThresholdRange
from smartgrow.enums.notifications import Direction, NotificationSeverity, NotificationType, SensorChannel
from smartgrow.services.application.severity_classifier import SeverityClassifier
from smartgrow.utils.time import epoch_millis, utc_now

IdFactory = Callable[[DedupKey], str]


def generate_notification_id(key: DedupKey) -> str:
    """Opaque id: semantic prefix + generation time + random suffix."""
    prefix = f"{key.type.value}_{key.zone_id}_{key.plant_id}_{key.sensor.value}"
    return f"{prefix}_{epoch_millis(utc_now())}_{secrets.token_hex(3)}"


def format_number(value: float) -> str:
    """Render a reading without trailing zeros: 25 -> "25", 25.50 -> "25.5"."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


def sensor_display(sensor: SensorChannel) -> tuple[str, str]:
    """(display name, unit suffix) for a channel."""
    return SENSOR_DISPLAY.get(sensor.value, (sensor.value, ""))


class NotificationBuilder:
    """Builds :class:`Notification` values; no side effects."""

    def __init__(self, classifier: SeverityClassifier | None = None, id_factory: IdFactory | None = None):
        self.classifier = classifier or SeverityClassifier()
        self.id_factory = id_factory or generate_notification_id

    # ==================== Violations ====================

    def build_environmental(
        self,
        sensor: SensorChannel,
        value: float,
        threshold: ThresholdRange,
        zone: Zone,
        plant: Plant,
        timestamp: datetime,
    ) -> Notification:
        """Build an environmental violation for an out-of-range ``value``."""
        direction, limit = self._violation(value, threshold)
        severity = self.classifier.classify(sensor, value, direction == Direction.BELOW)
        name, unit = sensor_display(sensor)
        message = (
            f"{plant.name} in {zone.display_name}: {name} is {direction.value} threshold "
            f"({format_number(value)}{unit} vs {format_number(limit)}{unit})"
        )
        return self._notification(
            NotificationType.ENVIRONMENTAL,
            severity,
            self._title(name, severity),
            message,
            sensor,
            value,
            threshold,
            zone,
            plant,
            timestamp,
        )

    def build_moisture(
        self,
        value: float,
        threshold: ThresholdRange,
        zone: Zone,
        plant: Plant,
        pin: int,
        timestamp: datetime,
    ) -> Notification:
        """Build a soil moisture violation for the reading on ``pin``."""
        sensor = SensorChannel.SOIL_MOISTURE
        direction, limit = self._violation(value, threshold)
        severity = self.classifier.classify(sensor, value, direction == Direction.BELOW)
        name, unit = sensor_display(sensor)
        message = (
            f"{plant.name} in {zone.display_name}: {name} (Pin {pin}) is {direction.value} threshold "
            f"({format_number(value)}{unit} vs {format_number(limit)}{unit})"
        )
        return self._notification(
            NotificationType.MOISTURE,
            severity,
            self._title(name, severity),
            message,
            sensor,
            value,
            threshold,
            zone,
            plant,
            timestamp,
            pin=pin,
        )

    # ==================== No data ====================

    def build_no_data(self, zone: Zone, plant: Plant, pin: int, timestamp: datetime) -> Notification:
        """The zone reported, but nothing on this plant's moisture pin."""
        return self._notification(
            NotificationType.MOISTURE,
            NotificationSeverity.WARNING,
            "No Moisture Data",
            f"{plant.name} in {zone.display_name}: No moisture data received for Pin {pin}",
            SensorChannel.SOIL_MOISTURE,
            0,
            ThresholdRange.from_pair(NO_DATA_RANGE),
            zone,
            plant,
            timestamp,
            pin=pin,
        )

    def build_no_sensor_data(self, zone: Zone, plant: Plant, timestamp: datetime) -> Notification:
        """The zone has no usable snapshot at all."""
        return self._notification(
            NotificationType.ENVIRONMENTAL,
            NotificationSeverity.WARNING,
            "No Sensor Data",
            f"{plant.name} in {zone.display_name}: No environmental sensor data available for {zone.display_name}",
            SensorChannel.ENVIRONMENTAL,
            0,
            ThresholdRange.from_pair(NO_DATA_RANGE),
            zone,
            plant,
            timestamp,
        )

    # ==================== Helpers ====================

    @staticmethod
    def _violation(value: float, threshold: ThresholdRange) -> tuple[Direction, float]:
        if threshold.contains(value):
            raise ValueError(f"{value} is within [{threshold.min}, {threshold.max}]; not a violation")
        if threshold.is_below(value):
            return Direction.BELOW, threshold.min
        return Direction.ABOVE, threshold.max

    @staticmethod
    def _title(name: str, severity: NotificationSeverity) -> str:
        return f"{name} {'Critical' if severity == NotificationSeverity.CRITICAL else 'Warning'}"

    def _notification(
        self,
        notification_type: NotificationType,
        severity: NotificationSeverity,
        title: str,
        message: str,
        sensor: SensorChannel,
        value: float,
        threshold: ThresholdRange,
        zone: Zone,
        plant: Plant,
        timestamp: datetime,
        pin: int | None = None,
    ) -> Notification:
        key = DedupKey(notification_type, zone.id, plant.plant_id, sensor, pin)
        return Notification(
            id=self.id_factory(key),
            type=notification_type,
            severity=severity,
            title=title,
            message=message,
            sensor=sensor,
            value=value,
            threshold=threshold,
            zone_id=zone.id,
            plant_id=plant.plant_id,
            plant_name=plant.name,
            timestamp=timestamp,
            pin=pin,
        )
