"""
Backend API Infrastructure
==========================
``requests``-based implementations of the engine's data source protocols.
"""

from infrastructure.api.client import ApiClient
from infrastructure.api.sensors import HttpSensorSnapshotSource
from infrastructure.api.thresholds import HttpSystemThresholdSource
from infrastructure.api.zones import HttpZoneCatalog

__all__ = [
    "ApiClient",
    "HttpSensorSnapshotSource",
    "HttpSystemThresholdSource",
    "HttpZoneCatalog",
]
