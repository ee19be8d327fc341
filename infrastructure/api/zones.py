"""HTTP-backed zone catalog."""

from __future__ import annotations

import logging
from typing import List

from pydantic import ValidationError as PydanticValidationError

from infrastructure.api.client import ApiClient
from smartgrow.domain.exceptions import FetchError
from smartgrow.domain.plant import Plant
from smartgrow.schemas.backend import PlantPayload, ZonePlantsPayload

logger = logging.getLogger(__name__)


class HttpZoneCatalog:
    """Lists plants via ``GET /zones/{zone}/plants``."""

    def __init__(self, client: ApiClient):
        self.client = client

    def get_plants(self, zone_id: str) -> List[Plant]:
        body = self.client.get(f"/zones/{zone_id}/plants")
        try:
            envelope = ZonePlantsPayload.model_validate(body)
        except PydanticValidationError as e:
            raise FetchError(f"Malformed plant list for {zone_id}", detail={"zone_id": zone_id}) from e

        plants: List[Plant] = []
        for entry in envelope.plants:
            try:
                plants.append(PlantPayload.model_validate(entry).to_domain(zone_id))
            except PydanticValidationError as e:
                logger.warning(
                    "Skipping malformed plant %s in %s: %s",
                    entry.get("plantId", "?"),
                    zone_id,
                    e.errors()[0].get("msg") if e.errors() else e,
                )
        logger.debug("Fetched %d plant(s) for %s", len(plants), zone_id)
        return plants
