"""
Catalog Client

Looks up inventory items and packages for display name and price.
"""

import logging

import httpx
from pydantic import ValidationError

from core.service_client_base import BaseServiceClient
from booking.line_items.models import LineItemKind

from .models import CatalogEntry
from .protocols import CatalogEntryNotFoundError, CatalogServiceError

logger = logging.getLogger(__name__)

COLLECTIONS = {
    LineItemKind.ITEM: "inventory",
    LineItemKind.PACKAGE: "packages",
}


class CatalogClient(BaseServiceClient):
    """Client for GET /api/inventory/{id} and GET /api/packages/{id}"""

    service_name = "catalog"

    async def get_entry(self, kind: LineItemKind, resource_id: str) -> CatalogEntry:
        collection = COLLECTIONS.get(kind)
        if collection is None:
            raise CatalogServiceError(f"'{kind.value}' lines are not in the catalog")

        try:
            response = await self.get(f"/api/{collection}/{resource_id}")
        except httpx.HTTPError as e:
            raise CatalogServiceError(f"Catalog service unreachable: {e}") from e

        if response.status_code == 404:
            raise CatalogEntryNotFoundError(f"{collection} entry {resource_id} not found", status_code=404)
        if response.is_error:
            message = self.error_message(response, f"Catalog lookup failed ({response.status_code})")
            raise CatalogServiceError(message, status_code=response.status_code)

        try:
            body = response.json()
            if isinstance(body, dict) and isinstance(body.get("data"), dict):
                body = body["data"]
            entry = CatalogEntry.model_validate({"resource_id": resource_id, **body, "kind": kind})
        except (ValueError, TypeError, ValidationError) as e:
            raise CatalogServiceError(f"Malformed catalog response: {e}") from e

        logger.debug(f"Resolved {collection}/{resource_id} -> {entry.name} @ {entry.unit_price}")
        return entry
