from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from infrastructure.api.client import ApiClient
from infrastructure.api.sensors import HttpSensorSnapshotSource
from infrastructure.api.thresholds import HttpSystemThresholdSource
from infrastructure.api.zones import HttpZoneCatalog
from smartgrow.config import AppConfig
from smartgrow.services.application.notification_engine import NotificationEngine
from smartgrow.services.application.notification_feed import NotificationFeed
from smartgrow.services.application.refresh_coordinator import RefreshCoordinator
from smartgrow.workers.refresh_scheduler import RefreshScheduler

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Aggregate and manage the notification services."""

    config: AppConfig
    api_client: Optional[ApiClient]
    engine: NotificationEngine
    coordinator: RefreshCoordinator
    feed: NotificationFeed
    scheduler: RefreshScheduler

    @classmethod
    def build(
        cls,
        config: AppConfig,
        *,
        engine: Optional[NotificationEngine] = None,
        start_scheduler: bool = False,
    ) -> "ServiceContainer":
        """Construct the service container with all dependencies.

        Args:
            config: Application configuration
            engine: Pre-built engine (tests); HTTP sources are wired when None
            start_scheduler: Whether to start the periodic refresh loop
        """
        api_client: Optional[ApiClient] = None
        if engine is None:
            api_client = ApiClient(
                config.api_base_url,
                token=config.api_token or None,
                timeout=config.http_timeout_seconds,
            )
            engine = NotificationEngine(
                HttpZoneCatalog(api_client),
                HttpSensorSnapshotSource(api_client),
                HttpSystemThresholdSource(api_client),
                zone_workers=config.zone_workers,
            )

        coordinator = RefreshCoordinator(engine)
        feed = NotificationFeed(max_size=config.feed_max_size)
        coordinator.subscribe(feed.apply)
        scheduler = RefreshScheduler(coordinator, config.refresh_interval_seconds)

        container = cls(
            config=config,
            api_client=api_client,
            engine=engine,
            coordinator=coordinator,
            feed=feed,
            scheduler=scheduler,
        )

        if start_scheduler and config.scheduler_enabled:
            scheduler.start()
        logger.info("ServiceContainer built successfully.")
        return container

    def shutdown(self) -> None:
        """Release external resources before process exit."""
        try:
            self.scheduler.shutdown()
        except Exception as e:
            logger.warning("Failed to stop RefreshScheduler: %s", e)

        if self.api_client is not None:
            self.api_client.close()
        logger.info("ServiceContainer shutdown complete.")
