"""
Notification Engine
===================
Orchestrates one threshold-monitoring evaluation cycle end to end.

Phases (nothing is retained between runs):

1. Fetch system thresholds (defaults substituted on failure)
2. Per zone: fetch plants, fetch the latest snapshot, evaluate every plant
3. Merge zone results in zone order
4. Deduplicate by semantic key
5. Sort newest first (stable)
6. Aggregate summary stats

Zones can be evaluated sequentially (``zone_workers=1``) or fanned out on a
bounded thread pool. Either way the merge happens in zone order and the
explicit sort restores the final ordering, so both produce the same result.

Errors are absorbed at the smallest scope: a failed fetch degrades one zone,
a missing threshold skips one sensor of one plant. Only when every fetch of
the run failed is :class:`EngineUnavailableError` raised to the caller.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Sequence

from smartgrow.domain.exceptions import ConfigError, EngineUnavailableError, FetchError
from smartgrow.domain.notification import Notification, NotificationRun
from smartgrow.domain.plant import Plant, SensorSnapshot, Zone
from smartgrow.domain.thresholds import SystemThresholds
from smartgrow.enums.notifications import SensorChannel
from smartgrow.services.application.deduplicator import dedupe
from smartgrow.services.application.notification_builder import NotificationBuilder
from smartgrow.services.application.stats_aggregator import aggregate
from smartgrow.services.application.threshold_resolver import ThresholdResolver
from smartgrow.utils.time import utc_now

if TYPE_CHECKING:
    from smartgrow.services.protocols import SensorSnapshotSource, SystemThresholdSource, ZoneCatalog

logger = logging.getLogger(__name__)

# Zone-level channels checked for every plant, in evaluation order
ENVIRONMENTAL_CHANNELS = (
    SensorChannel.LIGHT,
    SensorChannel.TEMPERATURE,
    SensorChannel.AIR_QUALITY,
    SensorChannel.HUMIDITY,
)


@dataclass
class ZoneEvaluation:
    """Sub-result produced by one zone; never shared between zones."""

    zone: Zone
    notifications: list[Notification] = field(default_factory=list)
    error: str | None = None
    catalog_failed: bool = False


class NotificationEngine:
    """
    Stateless evaluator: ``run()`` pulls fresh data and returns a
    :class:`NotificationRun` without keeping anything for the next call.
    """

    def __init__(
        self,
        zone_catalog: "ZoneCatalog",
        snapshot_source: "SensorSnapshotSource",
        threshold_source: "SystemThresholdSource",
        *,
        resolver: ThresholdResolver | None = None,
        builder: NotificationBuilder | None = None,
        zones: Sequence[Zone] | None = None,
        zone_workers: int = 1,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize the engine.

        Args:
            zone_catalog: Lists plants per zone
            snapshot_source: Latest sensor snapshot per zone
            threshold_source: System-wide display defaults
            resolver: Threshold resolver (default rule table if None)
            builder: Notification builder (default classifier and ids if None)
            zones: Zones to evaluate (the four known zones if None)
            zone_workers: 1 evaluates zones sequentially; >1 fans out on a thread pool
            clock: Source of "now" for run timing and "no sensor data" timestamps
        """
        if zone_workers < 1:
            raise ValueError(f"zone_workers must be >= 1, got {zone_workers}")
        self.zone_catalog = zone_catalog
        self.snapshot_source = snapshot_source
        self.threshold_source = threshold_source
        self.resolver = resolver or ThresholdResolver()
        self.builder = builder or NotificationBuilder()
        self.zones = tuple(zones) if zones is not None else Zone.known()
        self.zone_workers = zone_workers
        self.clock = clock

    # ==================== Run ====================

    def run(self) -> NotificationRun:
        """
        Execute one full evaluation cycle.

        Returns:
            NotificationRun with notifications sorted newest first and stats

        Raises:
            EngineUnavailableError: the threshold fetch and every zone's
                plant fetch failed
        """
        started_at = self.clock()
        logger.debug("Notification run started (%d zones, workers=%d)", len(self.zones), self.zone_workers)

        system_thresholds, defaulted = self._fetch_system_thresholds()
        evaluations = self._evaluate_zones(started_at)

        if defaulted and evaluations and all(evaluation.catalog_failed for evaluation in evaluations):
            raise EngineUnavailableError(
                "Backend unreachable: every fetch of the run failed",
                detail={evaluation.zone.id: evaluation.error for evaluation in evaluations},
            )

        merged = [notification for evaluation in evaluations for notification in evaluation.notifications]
        unique = dedupe(merged)
        # sorted() is stable, including with reverse=True
        ordered = sorted(unique, key=lambda notification: notification.timestamp, reverse=True)
        stats = aggregate(ordered)

        run = NotificationRun(
            notifications=tuple(ordered),
            stats=stats,
            system_thresholds=system_thresholds,
            started_at=started_at,
            completed_at=self.clock(),
            thresholds_defaulted=defaulted,
            zone_errors={evaluation.zone.id: evaluation.error for evaluation in evaluations if evaluation.error},
        )
        logger.info(
            "Notification run complete: %d notifications (%d critical, %d warning), %d zone error(s)",
            stats.total,
            stats.critical,
            stats.warning,
            len(run.zone_errors),
        )
        return run

    def _fetch_system_thresholds(self) -> tuple[SystemThresholds, bool]:
        try:
            return self.threshold_source.get(), False
        except (FetchError, ConfigError) as e:
            logger.warning("System thresholds unavailable, using defaults: %s", e)
            return SystemThresholds.defaults(), True

    def _evaluate_zones(self, now: datetime) -> list[ZoneEvaluation]:
        if self.zone_workers == 1 or len(self.zones) <= 1:
            return [self.evaluate_zone(zone, now) for zone in self.zones]

        workers = min(self.zone_workers, len(self.zones))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="zone-eval") as executor:
            futures = [executor.submit(self.evaluate_zone, zone, now) for zone in self.zones]
            # Fan-in in submission (zone) order, not completion order
            return [future.result() for future in futures]

    # ==================== Zone ====================

    def evaluate_zone(self, zone: Zone, now: datetime) -> ZoneEvaluation:
        """Fetch and evaluate one zone; fetch failures degrade instead of raising."""
        evaluation = ZoneEvaluation(zone=zone)

        try:
            plants = self.zone_catalog.get_plants(zone.id)
        except FetchError as e:
            logger.warning("Skipping %s: plant list fetch failed: %s", zone.id, e)
            evaluation.error = str(e)
            evaluation.catalog_failed = True
            return evaluation

        if not plants:
            logger.debug("No plants in %s, skipping", zone.id)
            return evaluation

        snapshot: SensorSnapshot | None
        try:
            snapshot = self.snapshot_source.get_latest(zone.id)
        except FetchError as e:
            logger.warning("Snapshot fetch failed for %s, reporting no sensor data: %s", zone.id, e)
            evaluation.error = str(e)
            snapshot = None

        if snapshot is None:
            logger.info("No sensor data for %s; flagging %d plant(s)", zone.id, len(plants))
            evaluation.notifications = [self.builder.build_no_sensor_data(zone, plant, now) for plant in plants]
            return evaluation

        for plant in plants:
            try:
                evaluation.notifications.extend(self.evaluate_plant(zone, plant, snapshot))
            except Exception as e:
                logger.error("Error evaluating plant %s in %s: %s", plant.plant_id, zone.id, e, exc_info=True)
        return evaluation

    # ==================== Plant ====================

    def evaluate_plant(self, zone: Zone, plant: Plant, snapshot: SensorSnapshot) -> list[Notification]:
        """Return the violations (and "no data" records) for one plant."""
        notifications: list[Notification] = []
        readings = {
            SensorChannel.LIGHT: snapshot.light,
            SensorChannel.TEMPERATURE: snapshot.temperature,
            SensorChannel.AIR_QUALITY: snapshot.air_quality,
            SensorChannel.HUMIDITY: snapshot.humidity,
        }

        for sensor in ENVIRONMENTAL_CHANNELS:
            value = readings[sensor]
            if value is None:
                logger.info("No %s reading in %s snapshot, skipping for plant %s", sensor.value, zone.id, plant.plant_id)
                continue
            threshold = self._resolve_or_skip(plant, sensor)
            if threshold is None or threshold.contains(value):
                continue
            notifications.append(
                self.builder.build_environmental(sensor, value, threshold, zone, plant, snapshot.timestamp)
            )

        reading = snapshot.reading_for_pin(plant.moisture_pin)
        if reading is None:
            logger.info(
                "No moisture reading for plant %s on pin %s (available pins: %s)",
                plant.plant_id,
                plant.moisture_pin,
                snapshot.available_pins,
            )
            notifications.append(self.builder.build_no_data(zone, plant, plant.moisture_pin, snapshot.timestamp))
            return notifications

        threshold = self._resolve_or_skip(plant, SensorChannel.SOIL_MOISTURE)
        if threshold is not None and not threshold.contains(reading.soil_moisture):
            notifications.append(
                self.builder.build_moisture(
                    reading.soil_moisture, threshold, zone, plant, reading.pin, snapshot.timestamp
                )
            )
        return notifications

    def _resolve_or_skip(self, plant: Plant, sensor: SensorChannel):
        try:
            return self.resolver.resolve(plant, sensor)
        except ConfigError as e:
            logger.warning("Skipping %s for plant %s: %s", sensor.value, plant.plant_id, e)
            return None
