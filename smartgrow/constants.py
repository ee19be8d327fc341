"""
Application Constants
=====================

Centralized constants to replace magic numbers throughout the codebase.
Organized by domain for easy discovery and maintenance.

Usage:
    from smartgrow.constants import KNOWN_ZONES, SeverityCutoffs
    from smartgrow.constants import Timeouts, Intervals
"""

# =============================================================================
# Timing Constants (seconds unless otherwise noted)
# =============================================================================


class Timeouts:
    """Timeout values for various operations."""

    # Network/API
    HTTP_REQUEST_TIMEOUT = 30  # seconds, total per backend fetch including the body


class Intervals:
    """Polling and scheduling intervals."""

    NOTIFICATION_REFRESH_DEFAULT = 600  # seconds (10 minutes)
    NOTIFICATION_REFRESH_MIN = 30  # seconds
    SCHEDULER_STOP_JOIN = 5  # seconds to wait for the loop thread on stop


# =============================================================================
# Zones & Hardware
# =============================================================================

# (zone_id, display name); evaluation order follows this tuple
KNOWN_ZONES = (
    ("zone1", "Zone 1"),
    ("zone2", "Zone 2"),
    ("zone3", "Zone 3"),
    ("zone4", "Zone 4"),
)

# ESP32 ADC pins wired to soil moisture probes
MOISTURE_PINS = (34, 35, 36, 39)


# =============================================================================
# Threshold Constants
# =============================================================================

# Humidity has no plant-level override; every plant is checked against this
FIXED_HUMIDITY_RANGE = (40.0, 80.0)

# Substituted when the backend's system thresholds cannot be fetched
DEFAULT_SYSTEM_THRESHOLDS = {
    "light": (0.0, 200.0),
    "temperature": (20.0, 30.0),
    "air_quality": (0.0, 100.0),
}

# Range attached to "no data" notifications
NO_DATA_RANGE = (0.0, 100.0)


class SeverityCutoffs:
    """
    Absolute danger cutoffs, independent of the configured range.

    A reading outside its configured range is a warning; beyond these
    values it is critical.
    """

    TEMPERATURE_LOW = 15.0  # °C
    TEMPERATURE_HIGH = 35.0  # °C
    LIGHT_LOW = 10.0  # %
    HUMIDITY_LOW = 20.0  # %
    HUMIDITY_HIGH = 90.0  # %
    AIR_QUALITY_HIGH = 500.0  # ppm
    MOISTURE_LOW = 10.0  # %
    MOISTURE_HIGH = 90.0  # %


# =============================================================================
# Display
# =============================================================================

# sensor wire name -> (display name, unit suffix)
SENSOR_DISPLAY = {
    "light": ("Light", "%"),
    "temperature": ("Temperature", "°C"),
    "humidity": ("Humidity", "%"),
    "airQuality": ("Air Quality", " ppm"),
    "soilMoisture": ("Soil Moisture", "%"),
    "environmental": ("Environmental", ""),
}


# =============================================================================
# Feed
# =============================================================================


class FeedLimits:
    """Presentation-side notification feed bounds."""

    MAX_NOTIFICATIONS = 100
