"""
Availability Service Client

Stateless wrapper around "check availability for window X given items Y,
excluding booking Z".
"""

import logging
from typing import List, Optional

import httpx

from core.service_client_base import BaseServiceClient
from booking.line_items.models import LineItem

from .conflicts import MalformedConflictPayload, normalize_unavailable
from .models import AvailabilityCheckRequest, AvailabilityCheckResponse, CandidateWindow
from .protocols import AvailabilityServiceError

logger = logging.getLogger(__name__)

CHECK_PATH = "/api/availability/check"


class AvailabilityClient(BaseServiceClient):
    """Client for the external Availability Service"""

    service_name = "availability"

    async def check(
        self,
        window: CandidateWindow,
        items: List[LineItem],
        exclude_entity_id: Optional[str] = None,
    ) -> AvailabilityCheckResponse:
        """
        Ask the service which requested lines cannot be satisfied

        Args:
            window: Candidate date or date range
            items: Requested line items
            exclude_entity_id: Booking whose own allocation must not count
                (used when rescheduling)

        Returns:
            AvailabilityCheckResponse; empty `unavailable` means satisfiable

        Raises:
            AvailabilityServiceError: transport failure, non-2xx status or
                malformed body. Cancellation propagates as CancelledError.
        """
        request = AvailabilityCheckRequest.build(window, items, exclude_entity_id)

        try:
            response = await self.post(CHECK_PATH, json=request.to_json())
        except httpx.HTTPError as e:
            logger.error(f"Availability check for {window} failed: {e}")
            raise AvailabilityServiceError(f"Availability service unreachable: {e}") from e

        if response.is_error:
            message = self.error_message(response, f"Availability check failed ({response.status_code})")
            logger.error(f"Availability check for {window} returned {response.status_code}: {message}")
            raise AvailabilityServiceError(message, status_code=response.status_code)

        try:
            unavailable = normalize_unavailable(response.json())
        except (ValueError, MalformedConflictPayload) as e:
            logger.error(f"Malformed availability response: {e}")
            raise AvailabilityServiceError(f"Malformed availability response: {e}") from e

        logger.debug(f"Availability for {window}: {len(unavailable)} unavailable of {len(items)}")
        return AvailabilityCheckResponse(unavailable=unavailable)
