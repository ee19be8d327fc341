"""
Enums Module
============

This module provides enumeration types for the SmartGrow notification engine.
Enums ensure type safety and consistency across the codebase.
"""

from smartgrow.enums.notifications import (
    Direction,
    NotificationSeverity,
    NotificationType,
    RefreshTrigger,
    SensorChannel,
    ThresholdSource,
)

__all__ = [
    "Direction",
    "NotificationSeverity",
    "NotificationType",
    "RefreshTrigger",
    "SensorChannel",
    "ThresholdSource",
]
