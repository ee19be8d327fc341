"""
Notification Response Schemas
=============================

Pydantic models documenting the JSON the notifications API returns.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from smartgrow.domain.notification import Notification, NotificationStats


class ThresholdRangeResponse(BaseModel):
    min: float
    max: float


class NotificationResponse(BaseModel):
    """A single notification in camelCase wire format."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    type: Literal["environmental", "moisture"]
    severity: Literal["warning", "critical"]
    title: str
    message: str
    sensor: str
    value: float
    threshold: ThresholdRangeResponse
    zone_id: str = Field(..., alias="zoneId")
    plant_id: str = Field(..., alias="plantId")
    plant_name: str = Field(..., alias="plantName")
    pin: int | None = None
    timestamp: str
    is_read: bool = Field(..., alias="isRead")

    @classmethod
    def from_domain(cls, notification: Notification) -> "NotificationResponse":
        return cls.model_validate(notification.to_dict())


class NotificationStatsResponse(BaseModel):
    total: int = Field(..., ge=0)
    critical: int = Field(..., ge=0)
    warning: int = Field(..., ge=0)
    unread: int = Field(..., ge=0)

    @classmethod
    def from_domain(cls, stats: NotificationStats) -> "NotificationStatsResponse":
        return cls(**stats.to_dict())


class RefreshStatusResponse(BaseModel):
    """Outcome of the most recent refresh attempt."""

    last_refreshed_at: str | None = None
    last_trigger: str | None = None
    generation: int = 0
    refreshing: bool = False
    error: str | None = None


class NotificationFeedResponse(BaseModel):
    """Body of ``GET /api/v1/notifications``."""

    notifications: list[NotificationResponse] = Field(default_factory=list)
    stats: NotificationStatsResponse
    refresh: RefreshStatusResponse

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "notifications": [
                    {
                        "id": "moisture_zone1_p1_soilMoisture_1767225600000_3fa9c1",
                        "type": "moisture",
                        "severity": "warning",
                        "title": "Soil Moisture Warning",
                        "message": "Chili in Zone 1: Soil Moisture (Pin 34) is below threshold (25% vs 30%)",
                        "sensor": "soilMoisture",
                        "value": 25,
                        "threshold": {"min": 30, "max": 70},
                        "zoneId": "zone1",
                        "plantId": "p1",
                        "plantName": "Chili",
                        "pin": 34,
                        "timestamp": "2026-01-01T00:00:00+00:00",
                        "isRead": False,
                    }
                ],
                "stats": {"total": 1, "critical": 0, "warning": 1, "unread": 1},
                "refresh": {
                    "last_refreshed_at": "2026-01-01T00:00:05+00:00",
                    "last_trigger": "manual",
                    "generation": 1,
                    "refreshing": False,
                    "error": None,
                },
            }
        }
    )

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
