"""
Backend Payload Schemas
=======================

Pydantic models for the SmartGrow REST backend responses. Each model accepts
the backend's camelCase keys and converts itself into the matching immutable
domain object via ``to_domain()``.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, ValidatorFunctionWrapHandler, field_validator
from pydantic import ValidationError as PydanticValidationError

from smartgrow.constants import MOISTURE_PINS
from smartgrow.domain.exceptions import ConfigError
from smartgrow.domain.plant import Plant, SensorSnapshot, SoilReading
from smartgrow.domain.thresholds import PlantThresholds, SystemThresholds, ThresholdRange
from smartgrow.utils.time import coerce_datetime

logger = logging.getLogger(__name__)

_BACKEND_CONFIG = ConfigDict(populate_by_name=True, extra="ignore")


class ThresholdRangePayload(BaseModel):
    """A ``{min, max}`` pair as stored by the backend."""

    model_config = _BACKEND_CONFIG

    min: float | None = None
    max: float | None = None

    def to_domain(self) -> ThresholdRange:
        """Raises ConfigError when a bound is missing or ``min >= max``."""
        return ThresholdRange(min=self.min, max=self.max)


class PlantThresholdsPayload(BaseModel):
    model_config = _BACKEND_CONFIG

    moisture: ThresholdRangePayload | None = None
    temperature: ThresholdRangePayload | None = None
    light: ThresholdRangePayload | None = None
    air_quality: ThresholdRangePayload | None = Field(default=None, alias="airQuality")

    @field_validator("moisture", "temperature", "light", "air_quality", mode="wrap")
    @classmethod
    def _lenient_range(
        cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo
    ) -> ThresholdRangePayload | None:
        # A malformed range only unsets that sensor, never the whole plant
        try:
            return handler(value)
        except PydanticValidationError as e:
            logger.warning("Ignoring malformed %s threshold %r: %s", info.field_name, value, e.errors()[0].get("msg"))
            return None

    def to_domain(self, plant_id: str = "") -> PlantThresholds:
        """Convert, leaving invalid ranges unset so only that sensor is skipped."""
        ranges: dict[str, ThresholdRange | None] = {}
        for name in ("moisture", "temperature", "light", "air_quality"):
            payload: ThresholdRangePayload | None = getattr(self, name)
            if payload is None:
                ranges[name] = None
                continue
            try:
                ranges[name] = payload.to_domain()
            except ConfigError as e:
                logger.warning("Ignoring invalid %s threshold for plant %s: %s", name, plant_id, e)
                ranges[name] = None
        return PlantThresholds(**ranges)


class PlantPayload(BaseModel):
    """Plant entry of ``GET /zones/{zone}/plants``."""

    model_config = _BACKEND_CONFIG

    plant_id: str = Field(..., alias="plantId", min_length=1)
    name: str
    zone: str | None = None
    moisture_pin: int = Field(..., alias="moisturePin")
    thresholds: PlantThresholdsPayload | None = None

    @field_validator("moisture_pin")
    @classmethod
    def _known_pin(cls, value: int) -> int:
        if value not in MOISTURE_PINS:
            raise ValueError(f"moisturePin must be one of {MOISTURE_PINS}, got {value}")
        return value

    def to_domain(self, default_zone: str = "") -> Plant:
        """Convert; a null ``thresholds`` object leaves every plant range unset."""
        thresholds = self.thresholds or PlantThresholdsPayload()
        return Plant(
            plant_id=self.plant_id,
            name=self.name,
            zone_id=self.zone or default_zone,
            moisture_pin=self.moisture_pin,
            thresholds=thresholds.to_domain(self.plant_id),
        )


class ZonePlantsPayload(BaseModel):
    """Envelope of ``GET /zones/{zone}/plants``; entries are validated one by one."""

    model_config = _BACKEND_CONFIG

    plants: list[dict[str, Any]] = Field(default_factory=list)


class ZoneSensorsPayload(BaseModel):
    """Zone-level channels; any of them may be absent from a partial batch."""

    model_config = _BACKEND_CONFIG

    humidity: float | None = None
    temperature: float | None = Field(default=None, alias="temp")
    light: float | None = None
    air_quality: float | None = Field(default=None, alias="airQuality")


class SoilReadingPayload(BaseModel):
    model_config = _BACKEND_CONFIG

    pin: int
    soil_moisture: float = Field(..., alias="soilMoisture")


class SensorSnapshotPayload(BaseModel):
    """Element of ``GET /logs/sensors?zoneId=...&latest=true``."""

    model_config = _BACKEND_CONFIG

    zone_id: str = Field(..., alias="zoneId")
    timestamp: datetime
    zone_sensors: ZoneSensorsPayload = Field(..., alias="zoneSensors")
    soil_moisture_by_pin: list[SoilReadingPayload] = Field(default_factory=list, alias="soilMoistureByPin")

    @field_validator("timestamp", mode="before")
    @classmethod
    def _utc_timestamp(cls, value: Any) -> datetime:
        parsed = coerce_datetime(value)
        if parsed is None:
            raise ValueError(f"Unparseable timestamp: {value!r}")
        return parsed

    def to_domain(self) -> SensorSnapshot:
        return SensorSnapshot(
            zone_id=self.zone_id,
            timestamp=self.timestamp,
            humidity=self.zone_sensors.humidity,
            temperature=self.zone_sensors.temperature,
            light=self.zone_sensors.light,
            air_quality=self.zone_sensors.air_quality,
            soil_moisture_by_pin=tuple(
                SoilReading(pin=reading.pin, soil_moisture=reading.soil_moisture)
                for reading in self.soil_moisture_by_pin
            ),
        )


class SystemThresholdsPayload(BaseModel):
    """Body of ``GET /system/thresholds``."""

    model_config = _BACKEND_CONFIG

    light: ThresholdRangePayload
    temperature: ThresholdRangePayload
    air_quality: ThresholdRangePayload = Field(..., alias="airQuality")

    def to_domain(self) -> SystemThresholds:
        return SystemThresholds(
            light=self.light.to_domain(),
            temperature=self.temperature.to_domain(),
            air_quality=self.air_quality.to_domain(),
        )
