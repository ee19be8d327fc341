"""
Threshold Resolver
==================
Picks the effective threshold range for a plant + sensor channel.

Precedence is not uniform across channels: soil moisture, temperature, light
and air quality use the plant's own override, while humidity (which has no
plant-level field) always uses a fixed constant. The asymmetry is kept in one
explicit table, ``THRESHOLD_SOURCES``, instead of ad hoc branching.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from smartgrow.constants import FIXED_HUMIDITY_RANGE
from smartgrow.domain.exceptions import ConfigError
from smartgrow.domain.plant import Plant
from smartgrow.domain.thresholds import ThresholdRange
from smartgrow.enums.notifications import SensorChannel, ThresholdSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ThresholdRule:
    """How one channel's range is obtained."""

    source: ThresholdSource
    plant_field: str | None = None
    fixed_range: ThresholdRange | None = None


THRESHOLD_SOURCES: Mapping[SensorChannel, ThresholdRule] = {
    SensorChannel.SOIL_MOISTURE: ThresholdRule(ThresholdSource.PLANT_OVERRIDE, plant_field="moisture"),
    SensorChannel.TEMPERATURE: ThresholdRule(ThresholdSource.PLANT_OVERRIDE, plant_field="temperature"),
    SensorChannel.LIGHT: ThresholdRule(ThresholdSource.PLANT_OVERRIDE, plant_field="light"),
    SensorChannel.AIR_QUALITY: ThresholdRule(ThresholdSource.PLANT_OVERRIDE, plant_field="air_quality"),
    SensorChannel.HUMIDITY: ThresholdRule(
        ThresholdSource.FIXED_CONSTANT, fixed_range=ThresholdRange.from_pair(FIXED_HUMIDITY_RANGE)
    ),
}


class ThresholdResolver:
    """
    Resolves ``(plant, sensor) -> ThresholdRange`` through a rule table.

    Plant overrides have no system fallback: a plant missing a required
    field raises :class:`ConfigError`, and the caller skips that sensor for
    that plant only.
    """

    def __init__(self, rules: Mapping[SensorChannel, ThresholdRule] | None = None):
        self.rules = dict(rules or THRESHOLD_SOURCES)

    def source_for(self, sensor: SensorChannel) -> ThresholdSource:
        return self._rule(sensor).source

    def resolve(self, plant: Plant, sensor: SensorChannel) -> ThresholdRange:
        """
        Return the effective range for ``sensor`` on ``plant``.

        Raises:
            ConfigError: channel has no rule, or the plant lacks the override
        """
        rule = self._rule(sensor)

        if rule.source == ThresholdSource.FIXED_CONSTANT:
            return rule.fixed_range

        threshold = plant.thresholds.get(rule.plant_field)
        if threshold is None:
            raise ConfigError(
                f"Plant {plant.plant_id} has no {rule.plant_field} threshold",
                detail={"plant_id": plant.plant_id, "sensor": sensor.value},
            )
        return threshold

    def _rule(self, sensor: SensorChannel) -> ThresholdRule:
        rule = self.rules.get(sensor)
        if rule is None:
            raise ConfigError(f"No threshold rule for sensor {sensor}", detail={"sensor": str(sensor)})
        return rule
