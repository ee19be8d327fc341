"""Notifications API
===================

Threshold notifications feed served to the mobile app.

Routes:
    GET    /api/v1/notifications/                    Feed, stats and refresh status
    GET    /api/v1/notifications/stats               Stats only
    POST   /api/v1/notifications/refresh             Run an evaluation now
    POST   /api/v1/notifications/<id>/read           Mark one notification read
    POST   /api/v1/notifications/read-all            Mark every notification read
    POST   /api/v1/notifications/<id>/dismiss        Hide one notification
    DELETE /api/v1/notifications/                    Clear the feed until the next run
    GET    /api/v1/notifications/system-thresholds   Display default ranges
"""

from __future__ import annotations

import logging

from flask import Blueprint, Response, current_app

from smartgrow.domain.exceptions import SmartGrowError
from smartgrow.enums.notifications import RefreshTrigger
from smartgrow.schemas.notifications import (
    NotificationFeedResponse,
    NotificationResponse,
    NotificationStatsResponse,
    RefreshStatusResponse,
)
from smartgrow.utils.http import error_response, safe_route, success_response

logger = logging.getLogger(__name__)

notifications_api = Blueprint("notifications_api", __name__)


def _get_container():
    container = current_app.config.get("CONTAINER")
    if container is None:
        raise RuntimeError("Service container not initialised")
    return container


def _feed_payload(container) -> dict:
    feed = container.feed
    response = NotificationFeedResponse(
        notifications=[NotificationResponse.from_domain(n) for n in feed.notifications()],
        stats=NotificationStatsResponse.from_domain(feed.stats()),
        refresh=RefreshStatusResponse(**container.coordinator.status().to_dict()),
    )
    return response.to_payload()


@notifications_api.get("/")
@safe_route("Failed to get notifications")
def list_notifications() -> Response:
    """Current feed, newest first.

    Returns:
        ``{"notifications": [...], "stats": {...}, "refresh": {...}}``
    """
    return success_response(_feed_payload(_get_container()))


@notifications_api.get("/stats")
@safe_route("Failed to get notification stats")
def get_stats() -> Response:
    stats = _get_container().feed.stats()
    return success_response(NotificationStatsResponse.from_domain(stats).model_dump())


@notifications_api.post("/refresh")
@safe_route("Failed to refresh notifications")
def refresh_notifications() -> Response:
    """Run one evaluation; on failure the previous feed is kept."""
    container = _get_container()
    try:
        run = container.coordinator.refresh(RefreshTrigger.MANUAL)
    except SmartGrowError as e:
        logger.warning("Manual refresh failed: %s", e)
        return error_response(
            "Failed to refresh notifications",
            502,
            details={"previous_feed_retained": container.coordinator.latest is not None},
        )

    message = None if run is not None else "Superseded by a newer refresh"
    return success_response(_feed_payload(container), message=message)


@notifications_api.post("/<notification_id>/read")
@safe_route("Failed to mark notification as read")
def mark_as_read(notification_id: str) -> Response:
    notification = _get_container().feed.mark_as_read(notification_id)
    return success_response(NotificationResponse.from_domain(notification).model_dump(by_alias=True))


@notifications_api.post("/read-all")
@safe_route("Failed to mark notifications as read")
def mark_all_as_read() -> Response:
    changed = _get_container().feed.mark_all_as_read()
    return success_response({"updated": changed})


@notifications_api.post("/<notification_id>/dismiss")
@safe_route("Failed to dismiss notification")
def dismiss(notification_id: str) -> Response:
    _get_container().feed.dismiss(notification_id)
    return success_response({"dismissed": notification_id})


@notifications_api.delete("/")
@safe_route("Failed to clear notifications")
def clear_all() -> Response:
    removed = _get_container().feed.clear_all()
    return success_response({"cleared": removed})


@notifications_api.get("/system-thresholds")
@safe_route("Failed to get system thresholds")
def get_system_thresholds() -> Response:
    container = _get_container()
    latest = container.coordinator.latest
    return success_response(
        {
            "thresholds": container.feed.system_thresholds.to_dict(),
            "defaulted": latest.thresholds_defaulted if latest is not None else True,
        }
    )
