"""
Shared test fixtures for the SmartGrow notification test suite.

Provides:
- Plant / snapshot factories
- In-memory fakes for the three external data sources
- Engine, coordinator and feed instances wired to those fakes
- A Flask app + client with the scheduler disabled

Usage:
    def test_example(engine, zone_catalog, snapshot_source):
        zone_catalog.plants["zone1"] = [make_plant("p1")]
        run = engine.run()
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

# Ensure repository root is on sys.path so tests can import application modules
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from smartgrow.domain.exceptions import FetchError
from smartgrow.domain.plant import Plant, SensorSnapshot, SoilReading, Zone
from smartgrow.domain.thresholds import PlantThresholds, SystemThresholds, ThresholdRange
from smartgrow.services.application.notification_builder import NotificationBuilder
from smartgrow.services.application.notification_engine import NotificationEngine
from smartgrow.services.application.notification_feed import NotificationFeed
from smartgrow.services.application.refresh_coordinator import RefreshCoordinator

# ---------------------------------------------------------------------------
# Logging: keep test output clean
# ---------------------------------------------------------------------------
logging.getLogger("smartgrow").setLevel(logging.WARNING)
logging.getLogger("infrastructure").setLevel(logging.WARNING)

SNAPSHOT_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
RUN_TIME = datetime(2026, 1, 1, 12, 5, tzinfo=timezone.utc)

ZONE1 = Zone("zone1", "Zone 1")
ZONE2 = Zone("zone2", "Zone 2")


# ========================== Factories ======================================


def full_thresholds(**overrides) -> PlantThresholds:
    """Plant thresholds where typical healthy readings are all in range."""
    values = {
        "moisture": ThresholdRange(30, 70),
        "temperature": ThresholdRange(18, 28),
        "light": ThresholdRange(20, 90),
        "air_quality": ThresholdRange(0, 100),
    }
    values.update(overrides)
    return PlantThresholds(**values)


def make_plant(
    plant_id: str = "p1",
    name: str = "Chili",
    zone_id: str = "zone1",
    moisture_pin: int = 34,
    thresholds: Optional[PlantThresholds] = None,
) -> Plant:
    return Plant(
        plant_id=plant_id,
        name=name,
        zone_id=zone_id,
        moisture_pin=moisture_pin,
        thresholds=thresholds if thresholds is not None else full_thresholds(),
    )


def make_snapshot(
    zone_id: str = "zone1",
    *,
    timestamp: datetime = SNAPSHOT_TIME,
    humidity: Optional[float] = 60,
    temperature: Optional[float] = 22,
    light: Optional[float] = 50,
    air_quality: Optional[float] = 40,
    soil: Optional[dict[int, float]] = None,
) -> SensorSnapshot:
    """Snapshot whose defaults sit inside ``full_thresholds`` and the humidity band."""
    readings = soil if soil is not None else {34: 50, 35: 50, 36: 50, 39: 50}
    return SensorSnapshot(
        zone_id=zone_id,
        timestamp=timestamp,
        humidity=humidity,
        temperature=temperature,
        light=light,
        air_quality=air_quality,
        soil_moisture_by_pin=tuple(SoilReading(pin, value) for pin, value in readings.items()),
    )


def counter_ids():
    """Deterministic id factory: n1, n2, ..."""
    state = {"n": 0}

    def factory(_key) -> str:
        state["n"] += 1
        return f"n{state['n']}"

    return factory


# ========================== Fake Sources ===================================


class FakeZoneCatalog:
    def __init__(self):
        self.plants: dict[str, list[Plant]] = {}
        self.failing: set[str] = set()

    def get_plants(self, zone_id: str) -> list[Plant]:
        if zone_id in self.failing:
            raise FetchError(f"plants unavailable for {zone_id}")
        return list(self.plants.get(zone_id, []))


class FakeSnapshotSource:
    def __init__(self):
        self.snapshots: dict[str, SensorSnapshot] = {}
        self.errors: dict[str, Exception] = {}

    def get_latest(self, zone_id: str) -> Optional[SensorSnapshot]:
        if zone_id in self.errors:
            raise self.errors[zone_id]
        return self.snapshots.get(zone_id)


class FakeThresholdSource:
    def __init__(self):
        self.thresholds = SystemThresholds(
            light=ThresholdRange(0, 100),
            temperature=ThresholdRange(15, 30),
            air_quality=ThresholdRange(0, 150),
        )
        self.error: Optional[Exception] = None

    def get(self) -> SystemThresholds:
        if self.error is not None:
            raise self.error
        return self.thresholds


# ========================== Fixtures =======================================


@pytest.fixture()
def zone_catalog():
    return FakeZoneCatalog()


@pytest.fixture()
def snapshot_source():
    return FakeSnapshotSource()


@pytest.fixture()
def threshold_source():
    return FakeThresholdSource()


@pytest.fixture()
def builder():
    return NotificationBuilder(id_factory=counter_ids())


@pytest.fixture()
def engine(zone_catalog, snapshot_source, threshold_source, builder):
    """Sequential engine with a frozen clock."""
    return NotificationEngine(
        zone_catalog,
        snapshot_source,
        threshold_source,
        builder=builder,
        clock=lambda: RUN_TIME,
    )


@pytest.fixture()
def coordinator(engine):
    return RefreshCoordinator(engine, clock=lambda: RUN_TIME + timedelta(seconds=1))


@pytest.fixture()
def feed():
    return NotificationFeed()


@pytest.fixture()
def app(engine):
    """Flask app wired to the fake-backed engine; no scheduler, no log file."""
    from smartgrow import create_app

    flask_app = create_app(
        {"log_path": "", "scheduler_enabled": False},
        engine=engine,
    )
    flask_app.config["TESTING"] = True
    yield flask_app
    flask_app.config["CONTAINER"].shutdown()


@pytest.fixture()
def client(app):
    return app.test_client()
