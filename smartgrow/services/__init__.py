"""
Service Organization
====================
**application/**
  Singleton services wired once per application by ``ServiceContainer``:
  the notification engine and its collaborators, the refresh coordinator and
  the presentation-side notification feed.

**protocols**
  Interfaces for the external data sources the engine pulls from. HTTP-backed
  implementations live in ``infrastructure/api``.
"""

from .application.notification_engine import NotificationEngine
from .application.notification_feed import NotificationFeed
from .application.refresh_coordinator import RefreshCoordinator, RefreshStatus

__all__ = [
    "NotificationEngine",
    "NotificationFeed",
    "RefreshCoordinator",
    "RefreshStatus",
]
