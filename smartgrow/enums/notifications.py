"""
Notification Enumerations
=========================

Enums shared by the threshold monitoring engine and the notification feed.
Values match the wire format the mobile app consumes.
"""

from enum import Enum


class SensorChannel(str, Enum):
    """
    Sensor channels evaluated per plant.
    Used by: threshold_resolver, severity_classifier, notification_builder
    """

    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"
    LIGHT = "light"
    AIR_QUALITY = "airQuality"
    SOIL_MOISTURE = "soilMoisture"
    # Zone-level marker used by "no sensor data" notifications
    ENVIRONMENTAL = "environmental"

    def __str__(self) -> str:
        return self.value


class NotificationType(str, Enum):
    """Notification families shown in the feed."""

    ENVIRONMENTAL = "environmental"
    MOISTURE = "moisture"

    def __str__(self) -> str:
        return self.value


class NotificationSeverity(str, Enum):
    WARNING = "warning"
    CRITICAL = "critical"

    def __str__(self) -> str:
        return self.value


class ThresholdSource(str, Enum):
    """
    Where the effective range for a sensor channel comes from.
    Used by: threshold_resolver
    """

    PLANT_OVERRIDE = "plant_override"
    FIXED_CONSTANT = "fixed_constant"

    def __str__(self) -> str:
        return self.value


class Direction(str, Enum):
    """Which bound a reading crossed."""

    BELOW = "below"
    ABOVE = "above"

    def __str__(self) -> str:
        return self.value


class RefreshTrigger(str, Enum):
    """
    What started an evaluation run.
    Used by: refresh_coordinator, refresh_scheduler, notifications API
    """

    MANUAL = "manual"
    PERIODIC = "periodic"
    STARTUP = "startup"

    def __str__(self) -> str:
        return self.value
