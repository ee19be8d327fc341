from __future__ import annotations

import atexit
import contextlib
import logging
import signal
import threading
from dataclasses import fields, replace
from typing import TYPE_CHECKING, Any

from flask import Flask, request
from werkzeug.exceptions import HTTPException

from smartgrow.blueprints.api.notifications import notifications_api
from smartgrow.config import load_config, setup_logging

if TYPE_CHECKING:
    from smartgrow.services.application.notification_engine import NotificationEngine

__version__ = "1.0.0"


def _apply_overrides(config, overrides: dict[str, Any]):
    """Return a re-validated copy of ``config`` with ``overrides`` applied."""
    names = {f.name for f in fields(config) if f.init}
    normalized = {}
    for key, value in overrides.items():
        name = key if key in names else key.lower()
        if name not in names:
            raise ValueError(f"Unknown configuration option: {key}")
        normalized[name] = value
    return replace(config, **normalized)


def create_app(
    config_overrides: dict[str, Any] | None = None,
    *,
    start_scheduler: bool = False,
    engine: "NotificationEngine | None" = None,
) -> Flask:
    config = load_config()
    if config_overrides:
        config = _apply_overrides(config, config_overrides)

    setup_logging(debug=config.DEBUG, log_path=config.log_path)

    flask_app = Flask(__name__)
    flask_app.config.update(config.as_flask_config())

    from smartgrow.services.container import ServiceContainer

    container = ServiceContainer.build(config, engine=engine, start_scheduler=start_scheduler)
    flask_app.config["CONTAINER"] = container

    # ── Graceful shutdown handlers ──────────────────────────────────
    _shutdown_lock = threading.Lock()
    _shutdown_done = False

    def _graceful_shutdown(reason: str = "unknown") -> None:
        nonlocal _shutdown_done
        with _shutdown_lock:
            if _shutdown_done:
                return
            _shutdown_done = True
        logging.info("Graceful shutdown initiated (%s)", reason)
        try:
            container.shutdown()
        except Exception as exc:
            logging.warning("Error during graceful shutdown: %s", exc)

    def _signal_handler(signum: int, _frame: object) -> None:
        sig_name = signal.Signals(signum).name
        logging.info("Received %s, shutting down", sig_name)
        _graceful_shutdown(sig_name)
        raise SystemExit(0)

    atexit.register(_graceful_shutdown, "atexit")

    # Signal handlers only matter when a background loop is running
    if start_scheduler:
        for sig in (signal.SIGINT, signal.SIGTERM):
            with contextlib.suppress(OSError, ValueError):
                signal.signal(sig, _signal_handler)

    # Global JSON error handler for /api/ routes; domain exceptions carry
    # their own ``http_status``.
    @flask_app.errorhandler(Exception)
    def _handle_unhandled(exc):
        if not request.path.startswith("/api/"):
            raise exc
        from smartgrow.domain.exceptions import SmartGrowError
        from smartgrow.utils.http import error_response, safe_error

        if isinstance(exc, HTTPException):
            status = int(exc.code or 500)
            if status >= 500:
                return safe_error(exc, status, context="http-exception")
            return error_response(exc.description or "Request failed", status)

        if isinstance(exc, SmartGrowError):
            status = exc.http_status
            if status >= 500:
                return safe_error(exc, status, context=type(exc).__name__)
            return error_response(str(exc) or "Request failed", status)

        return safe_error(exc, 500, context="unhandled")

    V1 = "/api/v1"
    flask_app.register_blueprint(notifications_api, url_prefix=f"{V1}/notifications")

    for bp_name in flask_app.blueprints:
        logging.info(" Registered blueprint: %s", bp_name)

    logger = logging.getLogger(__name__)
    logger.info("SmartGrow notification service initialized successfully.")
    return flask_app
