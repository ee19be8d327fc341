"""Severity classification for threshold violations.

Severity uses fixed absolute cutoffs that are independent of the configured
range: the range decides *whether* a reading is a violation, the cutoffs
decide whether that violation is a warning or critical.
"""

from __future__ import annotations

from typing import Callable, Dict

from smartgrow.constants import SeverityCutoffs
from smartgrow.enums.notifications import NotificationSeverity, SensorChannel

# (value, is_below_min) -> critical?
CriticalRule = Callable[[float, bool], bool]

CRITICAL_RULES: Dict[SensorChannel, CriticalRule] = {
    SensorChannel.TEMPERATURE: lambda value, _below: (
        value < SeverityCutoffs.TEMPERATURE_LOW or value > SeverityCutoffs.TEMPERATURE_HIGH
    ),
    SensorChannel.LIGHT: lambda value, _below: value < SeverityCutoffs.LIGHT_LOW,
    SensorChannel.HUMIDITY: lambda value, _below: (
        value < SeverityCutoffs.HUMIDITY_LOW or value > SeverityCutoffs.HUMIDITY_HIGH
    ),
    SensorChannel.AIR_QUALITY: lambda value, _below: value > SeverityCutoffs.AIR_QUALITY_HIGH,
    SensorChannel.SOIL_MOISTURE: lambda value, below: (
        (below and value < SeverityCutoffs.MOISTURE_LOW) or (not below and value > SeverityCutoffs.MOISTURE_HIGH)
    ),
}


class SeverityClassifier:
    """Maps a violating reading to warning or critical."""

    def classify(self, sensor: SensorChannel, value: float, is_below_min: bool) -> NotificationSeverity:
        rule = CRITICAL_RULES.get(sensor)
        if rule is not None and rule(value, is_below_min):
            return NotificationSeverity.CRITICAL
        return NotificationSeverity.WARNING
