"""
Configuration for the SmartGrow Notification Service
====================================================
Runtime settings for the backend client, the refresh scheduler and the
notifications API. Sets up the logging configuration as well.
"""

import os
from contextlib import suppress
from dataclasses import dataclass, field
from typing import Any

from smartgrow.constants import FeedLimits, Intervals, KNOWN_ZONES, Timeouts

DEFAULT_API_BASE_URL = "https://test-server-owq2.onrender.com/api/v1"


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "t", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer.") from None


@dataclass
class AppConfig:
    """Runtime configuration loaded from environment variables."""

    environment: str = field(default_factory=lambda: os.getenv("SMARTGROW_ENV", "development"))
    DEBUG: bool = field(default_factory=lambda: _env_bool("SMARTGROW_DEBUG", False))
    secret_key: str = field(default_factory=lambda: os.getenv("SMARTGROW_SECRET_KEY", "SmartGrowDevSecretKey"))

    # Backend API
    api_base_url: str = field(default_factory=lambda: os.getenv("SMARTGROW_API_BASE_URL", DEFAULT_API_BASE_URL))
    api_token: str = field(default_factory=lambda: os.getenv("SMARTGROW_API_TOKEN", ""))
    http_timeout_seconds: int = field(
        default_factory=lambda: _env_int("SMARTGROW_HTTP_TIMEOUT", Timeouts.HTTP_REQUEST_TIMEOUT)
    )

    # Notification refresh
    refresh_interval_seconds: int = field(
        default_factory=lambda: _env_int("SMARTGROW_REFRESH_INTERVAL", Intervals.NOTIFICATION_REFRESH_DEFAULT)
    )
    zone_workers: int = field(default_factory=lambda: _env_int("SMARTGROW_ZONE_WORKERS", 1))
    scheduler_enabled: bool = field(default_factory=lambda: _env_bool("SMARTGROW_SCHEDULER_ENABLED", True))
    feed_max_size: int = field(
        default_factory=lambda: _env_int("SMARTGROW_FEED_MAX_SIZE", FeedLimits.MAX_NOTIFICATIONS)
    )

    log_path: str = field(default_factory=lambda: os.getenv("SMARTGROW_LOG_PATH", "logs/smartgrow.log"))

    # Default insecure secret key - used only for detection
    _DEFAULT_SECRET_KEY: str = field(default="SmartGrowDevSecretKey", init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.http_timeout_seconds <= 0:
            raise ValueError(f"http_timeout_seconds must be positive, got {self.http_timeout_seconds}")
        if self.refresh_interval_seconds < Intervals.NOTIFICATION_REFRESH_MIN:
            raise ValueError(
                f"refresh_interval_seconds must be >= {Intervals.NOTIFICATION_REFRESH_MIN}, "
                f"got {self.refresh_interval_seconds}"
            )
        if not 1 <= self.zone_workers <= len(KNOWN_ZONES):
            raise ValueError(f"zone_workers must be between 1 and {len(KNOWN_ZONES)}, got {self.zone_workers}")
        if self.feed_max_size < 1:
            raise ValueError(f"feed_max_size must be positive, got {self.feed_max_size}")

        # SECURITY: Fail fast if using default secret key in production
        if self.environment == "production" and self.secret_key == self._DEFAULT_SECRET_KEY:
            raise RuntimeError(
                "SECURITY ERROR: Cannot use default secret key in production!\n"
                "Set SMARTGROW_SECRET_KEY environment variable to a secure random value.\n"
                'Generate one with: python -c "import secrets; print(secrets.token_hex(32))"'
            )

    def as_flask_config(self) -> dict[str, Any]:
        """Render configuration values for Flask application."""
        return {
            "ENV": self.environment,
            "SECRET_KEY": self.secret_key,
            "DEBUG": self.DEBUG,
            "JSON_SORT_KEYS": False,
            "SMARTGROW_API_BASE_URL": self.api_base_url,
            "SMARTGROW_REFRESH_INTERVAL": self.refresh_interval_seconds,
        }


def setup_logging(debug: bool = False, log_path: str = "logs/smartgrow.log") -> None:
    """Setup logging configuration."""
    import logging
    import sys
    from logging.handlers import RotatingFileHandler

    log_level = logging.DEBUG if debug else logging.INFO

    root = logging.getLogger()
    root.setLevel(log_level)

    # Keep existing handlers but avoid adding duplicates when create_app is called multiple times
    has_console = any(getattr(h, "name", "") == "smartgrow_console" for h in root.handlers)
    has_file = any(getattr(h, "name", "") == "smartgrow_file" for h in root.handlers)
    added_handler = False

    # Console handler (force UTF-8 so the °C unit survives Windows terminals)
    stream = sys.stdout
    with suppress(AttributeError, ValueError):
        stream.reconfigure(encoding="utf-8", errors="replace")
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if not has_console:
        console_handler = logging.StreamHandler(stream=stream)
        console_handler.name = "smartgrow_console"
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)
        added_handler = True

    if not has_file and log_path:
        log_dir = os.path.dirname(log_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.name = "smartgrow_file"
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
        added_handler = True

    # Ensure handler levels follow the desired log level
    for handler in root.handlers:
        if getattr(handler, "name", "") in {"smartgrow_console", "smartgrow_file"}:
            handler.setLevel(log_level)

    if added_handler:
        root.info("Logging initialized at level: %s", logging.getLevelName(log_level))

    if _env_bool("SMARTGROW_SILENCE_WERKZEUG", True):
        logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def load_config() -> AppConfig:
    """Helper for callers to load and validate configuration."""
    return AppConfig()
