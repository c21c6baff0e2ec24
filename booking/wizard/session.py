"""
Booking Session

One draft being built through the wizard. Owns the draft exclusively and
wires each edit through recalculation, verification and the step gate; on
submit it applies the commit outcome.
"""

import logging
from datetime import date
from typing import Any, Optional

from core.notifications import NotificationKind, NotificationSink
from booking.availability.models import CandidateWindow
from booking.catalog.protocols import CatalogClientProtocol
from booking.commit.coordinator import CommitCoordinator
from booking.commit.models import CommitOutcome, CommitResult
from booking.drafts.models import BookedEntity, BookingDraft, CustomerInfo, EntityKind, TimeBlock
from booking.drafts.validation import FieldErrors
from booking.financials.models import FinancialSnapshot, PaymentMethod, PaymentSelection
from booking.financials.recalculator import FinancialRecalculator
from booking.line_items import cart
from booking.line_items.models import LineItem, LineItemKind, VariationKey
from booking.verification.models import VerificationResult
from booking.verification.verifier import DebouncedVerifier

from .gate import WizardStepGate
from .models import StepValidation, WizardStep
from .protocols import ConfirmationPrompt

logger = logging.getLogger(__name__)

WINDOW_CHANGE_PROMPT = (
    "Changing the date will remove all selected items because their "
    "availability depends on the date. Continue?"
)


class BookingSession:
    """Draft session for creating a reservation, rental or appointment"""

    def __init__(
        self,
        kind: EntityKind,
        verifier: DebouncedVerifier,
        recalculator: FinancialRecalculator,
        coordinator: CommitCoordinator,
        gate: WizardStepGate,
        prompt: ConfirmationPrompt,
        notifications: NotificationSink,
        catalog: Optional[CatalogClientProtocol] = None,
        rental_window_days: int = 4,
        draft: Optional[BookingDraft] = None,
    ):
        self.verifier = verifier
        self.recalculator = recalculator
        self.coordinator = coordinator
        self.gate = gate
        self.prompt = prompt
        self.notifications = notifications
        self.catalog = catalog
        self.rental_window_days = rental_window_days

        self._draft = draft or BookingDraft(kind=kind)
        self._snapshot = self.recalculator.calculate(self._draft.line_items)
        if self._draft.line_items:
            self._draft = self._draft.model_copy(update={
                "payment": self.recalculator.reconcile_payment(self._draft.payment, None, self._snapshot),
            })
            self.verifier.notify_changed(self._draft.window, self._draft.line_items)

    # ====================
    # Read-only views
    # ====================

    @property
    def draft(self) -> BookingDraft:
        return self._draft

    @property
    def snapshot(self) -> FinancialSnapshot:
        return self._snapshot

    @property
    def verification(self) -> VerificationResult:
        return self.verifier.result

    @property
    def step(self) -> WizardStep:
        return self.gate.current

    def _update(self, **changes: Any) -> None:
        self._draft = self._draft.model_copy(update=changes)

    # ====================
    # Customer, notes, payment
    # ====================

    def set_customer(self, customer: CustomerInfo) -> None:
        self._update(customer=customer)

    def set_notes(self, notes: str) -> None:
        self._update(notes=notes)

    def set_time_block(self, time_block: Optional[TimeBlock]) -> None:
        self._update(time_block=time_block)

    def set_payment(
        self,
        amount: Optional[Any] = None,
        method: Optional[PaymentMethod] = None,
        reference_number: Optional[str] = None,
    ) -> PaymentSelection:
        changes = {}
        if amount is not None:
            changes["amount"] = amount
        if method is not None:
            changes["method"] = PaymentMethod(method)
        if reference_number is not None:
            changes["reference_number"] = reference_number
        payment = PaymentSelection.model_validate({**self._draft.payment.model_dump(), **changes})
        self._update(payment=payment)
        return payment

    def pay_in_full(self) -> PaymentSelection:
        return self.set_payment(amount=self._snapshot.grand_total)

    # ====================
    # Window
    # ====================

    def window_for(self, day: date) -> CandidateWindow:
        if self._draft.kind.uses_range:
            return CandidateWindow.spanning(day, self.rental_window_days)
        return CandidateWindow.single(day)

    async def select_date(self, day: date) -> bool:
        return await self.change_window(self.window_for(day))

    async def change_window(self, window: Optional[CandidateWindow]) -> bool:
        """
        Change the candidate window

        With items in the cart the user is asked first: availability depends
        on the date, so confirming clears the cart and resets verification.
        Declining leaves window and items untouched.

        Returns:
            True if the window was changed
        """
        if window == self._draft.window:
            return True

        if self._draft.line_items:
            confirmed = await self.prompt.confirm(WINDOW_CHANGE_PROMPT)
            if not confirmed:
                logger.debug(f"Window change to {window} declined")
                return False
            self._update(window=window)
            self._apply_items([])
            self.verifier.reset()
            logger.info(f"Window changed to {window}, cart cleared")
            return True

        self._update(window=window)
        self.verifier.notify_changed(window, self._draft.line_items)
        return True

    # ====================
    # Line items
    # ====================

    def _apply_items(self, items) -> None:
        previous = self._snapshot
        self._snapshot = self.recalculator.calculate(items)
        payment = self.recalculator.reconcile_payment(self._draft.payment, previous, self._snapshot)
        self._update(line_items=list(items), payment=payment, financials=None)

    def _items_changed(self, items) -> None:
        self._apply_items(items)
        self.verifier.notify_changed(self._draft.window, self._draft.line_items)

    def add_line(self, line: LineItem) -> None:
        self._items_changed(cart.add_line(self._draft.line_items, line))

    async def add_catalog_selection(
        self,
        kind: LineItemKind,
        resource_id: str,
        variation: VariationKey,
        quantity: int = 1,
    ) -> LineItem:
        """Resolve name and price from the catalog, then add the selection"""
        if self.catalog is None:
            raise RuntimeError("No catalog client configured for this session")
        entry = await self.catalog.get_entry(kind, resource_id)
        line = entry.line_for(variation, quantity)
        self.add_line(line)
        return line

    def replace_line(self, line_id: str, line: LineItem) -> None:
        self._items_changed(cart.replace_line(self._draft.line_items, line_id, line))

    def update_quantity(self, line_id: str, quantity: int) -> FieldErrors:
        try:
            items = cart.update_quantity(self._draft.line_items, line_id, quantity)
        except ValueError as e:
            return {f"line_items.{line_id}.quantity": str(e)}
        self._items_changed(items)
        return {}

    def remove_line(self, line_id: str) -> None:
        self._items_changed(cart.remove_line(self._draft.line_items, line_id))

    def remove_unavailable(self) -> None:
        self._items_changed(cart.remove_flagged(self._draft.line_items))

    def retry_verification(self) -> None:
        self.verifier.retry()

    # ====================
    # Navigation
    # ====================

    def validate_step(self, step: Optional[WizardStep] = None) -> StepValidation:
        return self.gate.validate(step or self.gate.current, self._draft, self.verification, self._snapshot)

    def next_step(self) -> StepValidation:
        return self.gate.advance(self._draft, self.verification, self._snapshot)

    def back(self) -> WizardStep:
        leaving = self.gate.current
        step = self.gate.back()
        if leaving == WizardStep.PAYMENT and step == WizardStep.ITEMS:
            self._update(payment=self.recalculator.reset_payment(self._draft.payment, self._snapshot))
        return step

    # ====================
    # Commit
    # ====================

    async def submit(self) -> CommitResult:
        """Authoritatively create the booking and apply the outcome"""
        result = await self.coordinator.create(self._draft, self._snapshot)

        if result.outcome == CommitOutcome.SUCCESS:
            self._apply_entity(result.entity)
            self.gate.route_to(WizardStep.FINISH)
            self.notifications.add(
                f"{self._draft.kind.value.capitalize()} {self._draft.entity_id} created",
                NotificationKind.SUCCESS,
            )
        elif result.outcome == CommitOutcome.CONFLICT:
            self._apply_conflict(result)
        elif result.outcome == CommitOutcome.VALIDATION_FAILED:
            self.notifications.add(list(result.field_errors.values()), NotificationKind.WARNING)
        elif result.error_code != "IN_PROGRESS":
            self.notifications.add(result.message or "Submission failed", NotificationKind.DANGER)

        return result

    def _apply_entity(self, entity: BookedEntity) -> None:
        changes = {"entity_id": entity.entity_id, "status": entity.status}
        if entity.window is not None:
            changes["window"] = entity.window
        if entity.line_items:
            changes["line_items"] = entity.line_items
        if entity.financials is not None:
            changes["financials"] = entity.financials
        self._update(**changes)
        self._snapshot = self.recalculator.calculate(self._draft.line_items)
        self.verifier.set_authoritative(self._draft.window, self._draft.line_items)

    def _apply_conflict(self, result: CommitResult) -> None:
        # Flags only; customer, notes and payment are left as entered
        self._update(line_items=cart.flag_unavailable(self._draft.line_items, result.unavailable))
        self.gate.route_to(WizardStep.ITEMS)
        self.verifier.apply_conflicts(result.unavailable)
        self.notifications.add(
            [result.message or "Some items are no longer available"]
            + [line.describe() for line in result.unavailable],
            NotificationKind.DANGER,
        )

    async def aclose(self) -> None:
        await self.verifier.aclose()
