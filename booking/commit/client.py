"""
Booking API Client

Authoritative create / reschedule / convert / cancel endpoints. The server
re-checks availability in the same transaction as the write and answers 409
with the unavailable lines when it fails.
"""

import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from core.service_client_base import BaseServiceClient
from booking.availability.conflicts import MalformedConflictPayload, has_conflict_list, normalize_unavailable
from booking.availability.models import CandidateWindow
from booking.drafts.models import BookedEntity, EntityKind

from .protocols import CommitConflictError, CommitRejectedError, CommitTransportError

logger = logging.getLogger(__name__)


class BookingApiClient(BaseServiceClient):
    """Client for the booking API commit endpoints"""

    service_name = "booking_api"

    async def create(self, kind: EntityKind, payload: Dict[str, Any]) -> BookedEntity:
        return await self._send("POST", f"/api/{kind.collection}", payload, kind)

    async def reschedule(
        self,
        kind: EntityKind,
        entity_id: str,
        window: CandidateWindow,
        payload: Optional[Dict[str, Any]] = None,
    ) -> BookedEntity:
        body = {**(payload or {}), "window": window.to_payload()}
        return await self._send("PUT", f"/api/{kind.collection}/{entity_id}/reschedule", body, kind)

    async def convert(self, reservation_id: str, payload: Optional[Dict[str, Any]] = None) -> BookedEntity:
        body = {**(payload or {}), "reservation_id": reservation_id}
        return await self._send("POST", "/api/rentals/from-reservation", body, EntityKind.RENTAL)

    async def cancel(self, kind: EntityKind, entity_id: str, reason: str) -> BookedEntity:
        return await self._send(
            "PUT", f"/api/{kind.collection}/{entity_id}/cancel", {"reason": reason}, kind,
        )

    # ========================================
    # Response handling
    # ========================================

    async def _send(self, method: str, path: str, body: Dict[str, Any], kind: EntityKind) -> BookedEntity:
        try:
            if method == "POST":
                response = await self.post(path, json=body)
            else:
                response = await self.put(path, json=body)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise CommitTransportError(f"Could not reach the booking service: {e}") from e

        return self._handle(response, kind, f"{method} {path}")

    def _handle(self, response: httpx.Response, kind: EntityKind, label: str) -> BookedEntity:
        status = response.status_code

        if status == 409:
            message = self.error_message(response, "Some items are no longer available")
            try:
                body = response.json()
                unavailable = normalize_unavailable(body) if has_conflict_list(body) else []
            except (ValueError, MalformedConflictPayload) as e:
                logger.warning(f"{label}: unreadable conflict body: {e}")
                unavailable = []
            logger.info(f"{label}: conflict on {len(unavailable)} lines")
            raise CommitConflictError(unavailable, message)

        if 400 <= status < 500:
            message = self.error_message(response, f"Request rejected ({status})")
            logger.warning(f"{label}: rejected with {status}: {message}")
            raise CommitRejectedError(message, status_code=status)

        if response.is_error:
            message = self.error_message(response, f"Booking service error ({status})")
            logger.error(f"{label}: server error {status}: {message}")
            raise CommitTransportError(message, status_code=status)

        try:
            body = response.json()
            return BookedEntity.model_validate(self._entity_body(body, kind))
        except (ValueError, TypeError, ValidationError) as e:
            logger.error(f"{label}: malformed response: {e}")
            raise CommitTransportError(f"Malformed booking response: {e}", status_code=status) from e

    @staticmethod
    def _entity_body(body: Any, kind: EntityKind) -> Dict[str, Any]:
        if not isinstance(body, dict):
            raise TypeError(f"Expected a JSON object, got {type(body).__name__}")
        for key in ("data", kind.value):
            if isinstance(body.get(key), dict):
                body = body[key]
                break
        return {"kind": kind, **body}
