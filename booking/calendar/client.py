"""
Calendar Client

Reads shop-declared unavailable dates.
"""

import logging
from typing import List

import httpx
from pydantic import ValidationError

from core.service_client_base import BaseServiceClient

from .models import ClosureDay
from .protocols import CalendarServiceError

logger = logging.getLogger(__name__)


class CalendarClient(BaseServiceClient):
    """Client for GET /api/unavailability"""

    service_name = "calendar"

    async def list_closures(self) -> List[ClosureDay]:
        try:
            response = await self.get("/api/unavailability")
        except httpx.HTTPError as e:
            raise CalendarServiceError(f"Calendar service unreachable: {e}") from e

        if response.is_error:
            message = self.error_message(response, f"Failed to load unavailable dates ({response.status_code})")
            raise CalendarServiceError(message, status_code=response.status_code)

        try:
            body = response.json()
            entries = body.get("data", body) if isinstance(body, dict) else body
            closures = [ClosureDay.model_validate(entry) for entry in entries]
        except (ValueError, TypeError, ValidationError) as e:
            raise CalendarServiceError(f"Malformed unavailability response: {e}") from e

        logger.info(f"Loaded {len(closures)} closure dates")
        return closures
