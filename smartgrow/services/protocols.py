"""
Service protocols (structural typing interfaces).

Protocols let the notification engine declare the *minimal* surface it
depends on without importing the concrete HTTP sources, keeping the engine
free of transport concerns and making tests trivially mockable.

Usage
-----
In a consumer service::

    from __future__ import annotations
    from typing import TYPE_CHECKING
    if TYPE_CHECKING:
        from smartgrow.services.protocols import ZoneCatalog

    class NotificationEngine:
        def __init__(self, zone_catalog: "ZoneCatalog", ...): ...

At runtime the concrete ``HttpZoneCatalog`` already satisfies the protocol
via structural subtyping; no explicit inheritance needed.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable

from smartgrow.domain.plant import Plant, SensorSnapshot
from smartgrow.domain.thresholds import SystemThresholds


@runtime_checkable
class ZoneCatalog(Protocol):
    """Lists the plants growing in a zone."""

    def get_plants(self, zone_id: str) -> List[Plant]:
        """Return the zone's plants; raises ``FetchError`` on network/HTTP failure."""
        ...


@runtime_checkable
class SensorSnapshotSource(Protocol):
    """Latest environmental + per-pin soil readings for a zone."""

    def get_latest(self, zone_id: str) -> Optional[SensorSnapshot]:
        """Return the latest snapshot, or ``None`` when the zone has none.

        "No snapshot" is a normal result; transport failures raise ``FetchError``.
        """
        ...


@runtime_checkable
class SystemThresholdSource(Protocol):
    """System-wide display default ranges."""

    def get(self) -> SystemThresholds:
        """Return the system thresholds; raises ``FetchError`` on failure."""
        ...
