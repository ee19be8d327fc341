"""Centralized exception hierarchy for SmartGrow.

All domain and service exceptions inherit from :class:`SmartGrowError` so that
callers can catch a single base class when they need a broad safety net, yet
still match on specific subclasses where narrower handling is appropriate.

Blueprint-level error handling (see ``smartgrow/utils/http.safe_route``) maps
these to the correct HTTP status codes automatically.

Hierarchy
---------
::

    SmartGrowError (base: maps to 500)
    ├── ValidationError              (400: bad input from caller)
    ├── NotFoundError                (404: entity does not exist)
    ├── ServiceError                 (500: business-logic failure)
    │   ├── FetchError               (502: backend / network, recoverable)
    │   │   └── FetchTimeoutError    (504: backend did not answer in time)
    │   └── EngineUnavailableError   (503: every fetch of a run failed)
    └── ConfigError                  (500: missing / invalid plant threshold)
"""

from __future__ import annotations


class SmartGrowError(Exception):
    """Base exception for all SmartGrow application errors.

    Parameters
    ----------
    message:
        Human-readable description (logged server-side, **not** leaked to
        the HTTP client unless the exception class opts in).
    detail:
        Optional machine-readable context dict attached to the error for
        structured logging.
    """

    http_status: int = 500

    def __init__(self, message: str = "", *, detail: dict | None = None) -> None:
        super().__init__(message)
        self.detail = detail or {}


# ── Client errors (4xx) ──────────────────────────────────────────────


class ValidationError(SmartGrowError):
    """Caller supplied invalid or incomplete input (HTTP 400)."""

    http_status: int = 400


class NotFoundError(SmartGrowError):
    """Requested entity does not exist (HTTP 404)."""

    http_status: int = 404


# ── Server errors (5xx) ──────────────────────────────────────────────


class ServiceError(SmartGrowError):
    """Business-logic failure in a service method (HTTP 500)."""

    http_status: int = 500


class FetchError(ServiceError):
    """A single backend resource could not be fetched (HTTP 502).

    Recoverable: the engine degrades to defaults or "no data"
    notifications instead of aborting the run.
    """

    http_status: int = 502


class FetchTimeoutError(FetchError):
    """Backend did not answer within the configured timeout (HTTP 504)."""

    http_status: int = 504


class EngineUnavailableError(ServiceError):
    """Every fetch of an evaluation run failed (HTTP 503)."""

    http_status: int = 503


class ConfigError(SmartGrowError):
    """Missing or invalid threshold configuration (HTTP 500)."""

    http_status: int = 500
