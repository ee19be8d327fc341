"""
Zone, Plant and Sensor Snapshot Entities
========================================

Read-only views of the data owned by the SmartGrow backend. Zones and plants
are managed by external services; snapshots are fetched fresh every
evaluation cycle.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from smartgrow.constants import KNOWN_ZONES
from smartgrow.domain.thresholds import PlantThresholds


@dataclass(frozen=True)
class Zone:
    """A fixed growing area sharing one sensor snapshot."""

    id: str
    display_name: str

    @staticmethod
    def known() -> tuple[Zone, ...]:
        """The four zones evaluated every cycle, in evaluation order."""
        return tuple(Zone(id=zone_id, display_name=name) for zone_id, name in KNOWN_ZONES)

    @staticmethod
    def display_name_for(zone_id: str) -> str:
        for known_id, name in KNOWN_ZONES:
            if known_id == zone_id:
                return name
        return zone_id


@dataclass(frozen=True)
class Plant:
    """An individually tracked specimen with its own moisture pin."""

    plant_id: str
    name: str
    zone_id: str
    moisture_pin: int
    thresholds: PlantThresholds = field(default_factory=PlantThresholds)


@dataclass(frozen=True)
class SoilReading:
    pin: int
    soil_moisture: float


@dataclass(frozen=True)
class SensorSnapshot:
    """
    The most recent batch of readings for a zone.

    Attributes:
        zone_id: Zone the readings belong to
        timestamp: Aware UTC time the readings were taken
        humidity: Relative humidity in %
        temperature: Temperature in °C
        light: Light intensity in %
        air_quality: Air quality in ppm
        soil_moisture_by_pin: Ordered per-pin soil moisture readings

    Zone-level channels are None when the batch omitted them.
    """

    zone_id: str
    timestamp: datetime
    humidity: float | None
    temperature: float | None
    light: float | None
    air_quality: float | None
    soil_moisture_by_pin: tuple[SoilReading, ...] = ()

    def reading_for_pin(self, pin: int) -> SoilReading | None:
        """Return the first soil reading wired to ``pin``, or ``None``."""
        return next((reading for reading in self.soil_moisture_by_pin if reading.pin == pin), None)

    @property
    def available_pins(self) -> list[int]:
        return [reading.pin for reading in self.soil_moisture_by_pin]
