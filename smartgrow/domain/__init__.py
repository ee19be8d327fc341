from smartgrow.domain.exceptions import (
    ConfigError,
    EngineUnavailableError,
    FetchError,
    FetchTimeoutError,
    NotFoundError,
    ServiceError,
    SmartGrowError,
    ValidationError,
)
from smartgrow.domain.notification import DedupKey, Notification, NotificationRun, NotificationStats
from smartgrow.domain.plant import Plant, SensorSnapshot, SoilReading, Zone
from smartgrow.domain.thresholds import PlantThresholds, SystemThresholds, ThresholdRange

__all__ = [
    "ConfigError",
    "DedupKey",
    "EngineUnavailableError",
    "FetchError",
    "FetchTimeoutError",
    "NotFoundError",
    "Notification",
    "NotificationRun",
    "NotificationStats",
    "Plant",
    "PlantThresholds",
    "SensorSnapshot",
    "ServiceError",
    "SmartGrowError",
    "SoilReading",
    "SystemThresholds",
    "ThresholdRange",
    "ValidationError",
    "Zone",
]
