"""
Threshold Value Objects
=======================
Immutable value objects describing the "normal" band for a sensor channel.

Following Domain-Driven Design (DDD), these are value objects:
- Immutable (frozen dataclass)
- No identity (defined by their attributes)
- Can be freely shared between zone evaluations
- Validate their own invariants
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from smartgrow.constants import DEFAULT_SYSTEM_THRESHOLDS
from smartgrow.domain.exceptions import ConfigError


@dataclass(frozen=True)
class ThresholdRange:
    """
    A ``[min, max]`` band defining normal readings for one channel.

    A reading violates the range only when it is strictly below ``min`` or
    strictly above ``max``.

    Attributes:
        min: Lower bound
        max: Upper bound, always greater than ``min``
    """

    min: float
    max: float

    def __post_init__(self):
        """Validate bounds after initialization."""
        if self.min is None or self.max is None:
            raise ConfigError("Threshold range requires both min and max", detail={"min": self.min, "max": self.max})
        if not self.min < self.max:
            raise ConfigError(
                f"Threshold min must be less than max, got {self.min} >= {self.max}",
                detail={"min": self.min, "max": self.max},
            )

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def is_below(self, value: float) -> bool:
        return value < self.min

    def to_dict(self) -> dict[str, float]:
        return {"min": self.min, "max": self.max}

    @staticmethod
    def from_pair(pair: tuple[float, float]) -> ThresholdRange:
        return ThresholdRange(min=pair[0], max=pair[1])


@dataclass(frozen=True)
class PlantThresholds:
    """
    Per-plant threshold overrides.

    There is deliberately no humidity field: humidity is always checked
    against the fixed system range.

    Attributes:
        moisture: Soil moisture range in %
        temperature: Temperature range in °C
        light: Light intensity range in %
        air_quality: Air quality range in ppm

    Any field may be ``None`` when the backend omitted it or sent an
    invalid range.
    """

    moisture: ThresholdRange | None = None
    temperature: ThresholdRange | None = None
    light: ThresholdRange | None = None
    air_quality: ThresholdRange | None = None

    def get(self, field_name: str) -> ThresholdRange | None:
        """Return the range stored under ``field_name`` (``None`` if unset or unknown)."""
        return getattr(self, field_name, None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "moisture": self.moisture.to_dict() if self.moisture else None,
            "temperature": self.temperature.to_dict() if self.temperature else None,
            "light": self.light.to_dict() if self.light else None,
            "airQuality": self.air_quality.to_dict() if self.air_quality else None,
        }


@dataclass(frozen=True)
class SystemThresholds:
    """
    System-wide ranges shown as display defaults.

    These are not authoritative per-plant limits; the engine never falls
    back to them when evaluating a plant.
    """

    light: ThresholdRange
    temperature: ThresholdRange
    air_quality: ThresholdRange

    def to_dict(self) -> dict[str, dict[str, float]]:
        return {
            "light": self.light.to_dict(),
            "temperature": self.temperature.to_dict(),
            "airQuality": self.air_quality.to_dict(),
        }

    @staticmethod
    def defaults() -> SystemThresholds:
        """Hardcoded ranges substituted when the backend is unreachable."""
        return SystemThresholds(
            light=ThresholdRange.from_pair(DEFAULT_SYSTEM_THRESHOLDS["light"]),
            temperature=ThresholdRange.from_pair(DEFAULT_SYSTEM_THRESHOLDS["temperature"]),
            air_quality=ThresholdRange.from_pair(DEFAULT_SYSTEM_THRESHOLDS["air_quality"]),
        )
