"""
Reschedule Session

Staff-side date picker for an existing booking. The booking's own window and
items are the confirmed baseline, and its id is excluded from the
availability check so it never conflicts with itself.
"""

import logging
from datetime import date
from typing import Optional

from core.notifications import NotificationKind, NotificationSink
from booking.availability.models import CandidateWindow
from booking.commit.coordinator import CommitCoordinator
from booking.commit.models import CommitOperation, CommitOutcome, CommitResult
from booking.drafts.models import BookedEntity
from booking.verification.models import VerificationResult
from booking.verification.verifier import DebouncedVerifier

logger = logging.getLogger(__name__)


class RescheduleSession:
    """Pick a new date for a booking and commit it"""

    def __init__(
        self,
        entity: BookedEntity,
        verifier: DebouncedVerifier,
        coordinator: CommitCoordinator,
        notifications: NotificationSink,
        rental_window_days: int = 4,
    ):
        self.entity = entity
        self.verifier = verifier
        self.coordinator = coordinator
        self.notifications = notifications
        self.rental_window_days = rental_window_days
        self.window: Optional[CandidateWindow] = None

        self.verifier.exclude_entity_id = entity.entity_id
        self.verifier.set_authoritative(entity.window, entity.line_items)

    @property
    def verification(self) -> VerificationResult:
        return self.verifier.result

    @property
    def is_unchanged(self) -> bool:
        return self.window is not None and self.window == self.entity.window

    @property
    def needs_verification(self) -> bool:
        """Bookings without lines have nothing to check locally; the server still decides"""
        return bool(self.entity.line_items)

    @property
    def can_confirm(self) -> bool:
        if self.window is None or not self.entity.is_reschedulable:
            return False
        return not self.needs_verification or self.verification.is_satisfiable

    def select_start_date(self, day: date) -> CandidateWindow:
        if self.entity.kind.uses_range:
            window = CandidateWindow.spanning(day, self.rental_window_days)
        else:
            window = CandidateWindow.single(day)
        self.window = window
        if self.needs_verification:
            self.verifier.notify_changed(window, self.entity.line_items)
        return window

    def retry_verification(self) -> None:
        if self.needs_verification:
            self.verifier.retry()

    async def confirm(self) -> CommitResult:
        if self.window is None:
            return CommitResult.invalid(CommitOperation.RESCHEDULE, {"window": "Please select a date"})

        if not self.entity.is_reschedulable:
            return CommitResult.invalid(
                CommitOperation.RESCHEDULE,
                {"status": f"A {self.entity.kind.value} with status '{self.entity.status}' cannot be rescheduled"},
            )

        if self.is_unchanged:
            logger.debug(f"{self.entity.entity_id}: date unchanged, nothing to reschedule")
            return CommitResult.success(CommitOperation.RESCHEDULE, self.entity)

        if self.needs_verification and not self.verification.is_satisfiable:
            return CommitResult.failed(
                CommitOperation.RESCHEDULE,
                "Availability for the new date has not been confirmed",
                error_code="UNVERIFIED",
            )

        result = await self.coordinator.reschedule(
            self.entity.kind, self.entity.entity_id, self.window, status=self.entity.status,
        )

        if result.outcome == CommitOutcome.SUCCESS:
            self.entity = result.entity
            self.window = result.entity.window or self.window
            self.verifier.set_authoritative(self.entity.window, self.entity.line_items)
            self.notifications.add(f"Rescheduled to {self.window}", NotificationKind.SUCCESS)
        elif result.outcome == CommitOutcome.CONFLICT:
            self.verifier.apply_conflicts(result.unavailable)
            self.notifications.add(
                [result.message or "Some items are not available on the new date"]
                + [line.describe() for line in result.unavailable],
                NotificationKind.DANGER,
            )
        elif result.error_code != "IN_PROGRESS":
            self.notifications.add(result.message or "Reschedule failed", NotificationKind.DANGER)

        return result

    async def aclose(self) -> None:
        await self.verifier.aclose()
