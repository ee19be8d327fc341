"""
Schemas Module
==============

This module provides Pydantic models for backend payload parsing and API
responses. Schemas ensure data integrity and provide automatic validation.
"""

from smartgrow.schemas.backend import (
    PlantPayload,
    PlantThresholdsPayload,
    SensorSnapshotPayload,
    SystemThresholdsPayload,
    ThresholdRangePayload,
    ZonePlantsPayload,
)
from smartgrow.schemas.notifications import (
    NotificationFeedResponse,
    NotificationResponse,
    NotificationStatsResponse,
    RefreshStatusResponse,
)

__all__ = [
    "NotificationFeedResponse",
    "NotificationResponse",
    "NotificationStatsResponse",
    "PlantPayload",
    "PlantThresholdsPayload",
    "RefreshStatusResponse",
    "SensorSnapshotPayload",
    "SystemThresholdsPayload",
    "ThresholdRangePayload",
    "ZonePlantsPayload",
]
