"""HTTP-backed system threshold source."""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError

from infrastructure.api.client import ApiClient
from smartgrow.domain.exceptions import FetchError
from smartgrow.domain.thresholds import SystemThresholds
from smartgrow.schemas.backend import SystemThresholdsPayload


class HttpSystemThresholdSource:
    """System display defaults via ``GET /system/thresholds``."""

    def __init__(self, client: ApiClient):
        self.client = client

    def get(self) -> SystemThresholds:
        body = self.client.get("/system/thresholds")
        try:
            return SystemThresholdsPayload.model_validate(body).to_domain()
        except PydanticValidationError as e:
            raise FetchError("Malformed system thresholds") from e
