"""
SmartGrow Backend API Client
============================
Thin wrapper over ``requests.Session`` for the SmartGrow REST backend.

Every request carries JSON headers and an optional bearer token. Transport and
HTTP failures are normalised to ``FetchError`` (and ``FetchTimeoutError`` for
timeouts) so callers only handle domain errors.

``timeout`` bounds the whole fetch. requests applies its own ``timeout`` to the
connect and to each socket read only, so the body is streamed and the total
deadline is checked between chunks.

``requests.Session`` is not documented as thread-safe. Unless a session is
passed in, each thread calling the client gets its own session; an injected
session is shared by every thread and the caller owns that constraint.
"""

from __future__ import annotations

import json as jsonlib
import logging
import threading
from time import monotonic
from typing import Any, Optional

import requests

from smartgrow.constants import Timeouts
from smartgrow.domain.exceptions import FetchError, FetchTimeoutError

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 8192


class ApiClient:
    """JSON client bound to one backend base URL."""

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = Timeouts.HTTP_REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize API client.

        Args:
            base_url: Backend root, e.g. ``https://host/api/v1``
            token: Bearer token sent with every request (omitted if empty)
            timeout: Total time allowed for one request, body included, in seconds
            session: Session shared by all threads (one per thread is created if None)
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._shared_session = session
        self._local = threading.local()
        self._owned_sessions: list[requests.Session] = []
        self._sessions_lock = threading.Lock()
        if session is not None:
            self._configure(session)

    @property
    def session(self) -> requests.Session:
        """Session for the calling thread."""
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._configure(requests.Session())
            self._local.session = session
            with self._sessions_lock:
                self._owned_sessions.append(session)
        return session

    def _configure(self, session: requests.Session) -> requests.Session:
        session.headers.update({"Content-Type": "application/json", "Accept": "application/json"})
        if self.token:
            session.headers["Authorization"] = f"Bearer {self.token}"
        return session

    def get(self, endpoint: str, params: Optional[dict[str, Any]] = None) -> Any:
        return self.request("GET", endpoint, params=params)

    def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        """
        Perform a request and return the decoded JSON body.

        Raises:
            FetchTimeoutError: No complete answer within ``timeout``
            FetchError: Connection failure, non-2xx status or undecodable body
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        detail = {"method": method, "endpoint": endpoint}
        deadline = monotonic() + self.timeout

        try:
            response = self.session.request(
                method, url, params=params, json=json, timeout=self.timeout, stream=True
            )
        except requests.Timeout as e:
            raise self._timed_out(method, endpoint, detail) from e
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, endpoint, e)
            raise FetchError(f"Request to {endpoint} failed: {e}", detail=detail) from e

        try:
            if not response.ok:
                message = self._error_message(response)
                logger.warning("%s %s returned %s: %s", method, endpoint, response.status_code, message)
                raise FetchError(message, detail={**detail, "status": response.status_code})

            content = self._read_body(response, deadline, method, endpoint, detail)
        finally:
            response.close()

        try:
            return jsonlib.loads(content)
        except ValueError as e:
            raise FetchError(f"Invalid JSON from {endpoint}", detail={**detail, "status": response.status_code}) from e

    def _read_body(
        self,
        response: requests.Response,
        deadline: float,
        method: str,
        endpoint: str,
        detail: dict[str, Any],
    ) -> bytes:
        chunks: list[bytes] = []
        try:
            for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                if monotonic() > deadline:
                    raise self._timed_out(method, endpoint, detail)
                chunks.append(chunk)
        except requests.Timeout as e:
            raise self._timed_out(method, endpoint, detail) from e
        except requests.RequestException as e:
            logger.warning("%s %s failed while reading the body: %s", method, endpoint, e)
            raise FetchError(f"Request to {endpoint} failed: {e}", detail=detail) from e
        return b"".join(chunks)

    def _timed_out(self, method: str, endpoint: str, detail: dict[str, Any]) -> FetchTimeoutError:
        logger.warning("%s %s timed out after %ss", method, endpoint, self.timeout)
        return FetchTimeoutError(f"Request to {endpoint} timed out after {self.timeout}s", detail=detail)

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """Prefer the backend's ``message`` field over a bare status line."""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return f"HTTP error! status: {response.status_code}"

    def close(self) -> None:
        if self._shared_session is not None:
            self._shared_session.close()
        with self._sessions_lock:
            sessions, self._owned_sessions = self._owned_sessions, []
        for session in sessions:
            session.close()
