"""
Commit Coordinator

Runs one authoritative write and classifies what happened. Applying the
outcome to the draft (replacing it, flagging lines, routing the wizard) is
the session's job.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from booking.availability.models import CandidateWindow
from booking.drafts.models import (
    RESCHEDULABLE_STATUSES,
    TERMINAL_STATUSES,
    BookingDraft,
    EntityKind,
)
from booking.drafts.validation import DraftValidator
from booking.financials.models import FinancialSnapshot

from .models import CommitOperation, CommitResult
from .protocols import (
    CommitClientProtocol,
    CommitConflictError,
    CommitRejectedError,
    CommitTransportError,
)

logger = logging.getLogger(__name__)


class CommitInProgressError(Exception):
    """Another commit from this coordinator has not settled yet"""
    pass


class CommitCoordinator:
    """Single-flight authoritative commits with local pre-validation"""

    def __init__(self, client: CommitClientProtocol, validator: Optional[DraftValidator] = None):
        self.client = client
        self.validator = validator or DraftValidator()
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @asynccontextmanager
    async def _single_flight(self):
        if self._in_flight:
            raise CommitInProgressError("A submission is already in progress")
        self._in_flight = True
        try:
            yield
        finally:
            self._in_flight = False

    async def _guarded(self, operation: CommitOperation, call) -> CommitResult:
        try:
            async with self._single_flight():
                entity = await call()
        except CommitInProgressError as e:
            logger.warning(f"{operation.value}: rejected, {e}")
            return CommitResult.failed(operation, str(e), error_code="IN_PROGRESS")
        except CommitConflictError as e:
            return CommitResult.conflict(operation, e.unavailable, e.message)
        except CommitRejectedError as e:
            return CommitResult.failed(operation, e.message, error_code="REJECTED")
        except CommitTransportError as e:
            return CommitResult.failed(operation, e.message, error_code="TRANSPORT")

        logger.info(f"{operation.value}: {entity.kind.value} {entity.entity_id} is {entity.status}")
        return CommitResult.success(operation, entity)

    # ====================
    # Operations
    # ====================

    async def create(self, draft: BookingDraft, snapshot: FinancialSnapshot) -> CommitResult:
        """Create the reservation, rental or appointment described by the draft"""
        errors = self.validator.validate_for_commit(draft, snapshot)
        if errors:
            logger.info(f"create: {len(errors)} validation errors, not submitting")
            return CommitResult.invalid(CommitOperation.CREATE, errors)

        payload = draft.to_payload()
        return await self._guarded(
            CommitOperation.CREATE, lambda: self.client.create(draft.kind, payload),
        )

    async def reschedule(
        self,
        kind: EntityKind,
        entity_id: str,
        window: CandidateWindow,
        payload: Optional[Dict[str, Any]] = None,
        status: Optional[str] = None,
    ) -> CommitResult:
        """
        Move a booking to a new window

        When the booking's current status is known, bookings that are past the
        point of rescheduling are refused locally.
        """
        errors = self.validator.validate_window(kind, window)
        if not entity_id:
            errors["entity_id"] = "Missing booking id"
        if status is not None and status not in RESCHEDULABLE_STATUSES[kind]:
            errors["status"] = f"A {kind.value} with status '{status}' cannot be rescheduled"
        if errors:
            return CommitResult.invalid(CommitOperation.RESCHEDULE, errors)

        return await self._guarded(
            CommitOperation.RESCHEDULE,
            lambda: self.client.reschedule(kind, entity_id, window, payload),
        )

    async def convert(self, reservation_id: str, payload: Optional[Dict[str, Any]] = None) -> CommitResult:
        """Turn a reservation into a rental"""
        if not reservation_id:
            return CommitResult.invalid(CommitOperation.CONVERT, {"reservation_id": "Missing reservation id"})

        return await self._guarded(
            CommitOperation.CONVERT, lambda: self.client.convert(reservation_id, payload),
        )

    async def cancel(
        self,
        kind: EntityKind,
        entity_id: str,
        reason: str,
        status: Optional[str] = None,
    ) -> CommitResult:
        errors: Dict[str, str] = {}
        if not entity_id:
            errors["entity_id"] = "Missing booking id"
        if status in TERMINAL_STATUSES:
            errors["status"] = f"A {kind.value} with status '{status}' cannot be cancelled"
        if not (reason or "").strip():
            errors["reason"] = "Please give a reason for cancelling"
        if errors:
            return CommitResult.invalid(CommitOperation.CANCEL, errors)

        return await self._guarded(
            CommitOperation.CANCEL, lambda: self.client.cancel(kind, entity_id, reason.strip()),
        )
