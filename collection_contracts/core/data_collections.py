from __future__ import annotations
import httpx
from dataclasses import dataclass
from typing import Optional
from collection_contracts.core.config import settings
from collection_contracts.schemas.collections import RawCollectionSchema


class DataCollectionsError(RuntimeError):
    """Remote store failure other than 'collection not found'."""


@dataclass
class DataCollectionsClient:
    api_key: str
    site_id: str | None = None
    api_base: str = settings.data_api_base
    timeout: float = settings.fetch_timeout_seconds
    transport: httpx.AsyncBaseTransport | None = None

    def _headers(self) -> dict:
        headers = {
            "Authorization": self.api_key,
            "Accept": "application/json",
        }
        if self.site_id:
            headers["wix-site-id"] = self.site_id
        return headers

    async def get_collection(self, collection_id: str) -> Optional[RawCollectionSchema]:
        """Fetch a collection schema; None when the store does not know the id."""
        url = f"{self.api_base}/wix-data/v2/collections/{collection_id}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.get(url, headers=self._headers())
        except httpx.HTTPError as e:
            raise DataCollectionsError(f"Request for collection {collection_id} failed: {e}") from e

        if r.status_code == 404:
            return None
        try:
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise DataCollectionsError(
                f"Fetching collection {collection_id} returned HTTP {r.status_code}"
            ) from e

        payload = r.json()
        return RawCollectionSchema.model_validate(payload.get("collection", payload))


def client_from_settings() -> DataCollectionsClient:
    if not settings.data_api_key:
        raise DataCollectionsError("data_api_key is not configured")
    return DataCollectionsClient(api_key=settings.data_api_key, site_id=settings.site_id)
