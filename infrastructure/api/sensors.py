"""HTTP-backed sensor snapshot source."""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from infrastructure.api.client import ApiClient
from smartgrow.domain.exceptions import FetchError
from smartgrow.domain.plant import SensorSnapshot
from smartgrow.schemas.backend import SensorSnapshotPayload

logger = logging.getLogger(__name__)


class HttpSensorSnapshotSource:
    """Latest snapshot via ``GET /logs/sensors?zoneId=...&latest=true``."""

    def __init__(self, client: ApiClient):
        self.client = client

    def get_latest(self, zone_id: str) -> Optional[SensorSnapshot]:
        body = self.client.get("/logs/sensors", params={"zoneId": zone_id, "latest": "true"})
        if not isinstance(body, list):
            raise FetchError(f"Expected a list of sensor logs for {zone_id}", detail={"zone_id": zone_id})
        if not body:
            return None

        try:
            return SensorSnapshotPayload.model_validate(body[0]).to_domain()
        except PydanticValidationError as e:
            raise FetchError(f"Malformed sensor snapshot for {zone_id}", detail={"zone_id": zone_id}) from e
