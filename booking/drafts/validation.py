"""
Draft validation

Structural checks that never need the network. Every check returns a dict of
field path -> message; an empty dict means valid.
"""

import re
from datetime import date
from typing import Callable, Dict, Optional

from booking.availability.models import CandidateWindow
from booking.calendar.models import ClosureCalendar
from booking.financials.models import ZERO, FinancialSnapshot

from .models import BookingDraft, EntityKind

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
DEFAULT_PHONE_PATTERN = r"^09\d{9}$"

FieldErrors = Dict[str, str]


class DraftValidator:
    """Local validation of a booking draft"""

    def __init__(
        self,
        calendar: Optional[ClosureCalendar] = None,
        phone_pattern: str = DEFAULT_PHONE_PATTERN,
        today: Callable[[], date] = date.today,
    ):
        self.calendar = calendar or ClosureCalendar()
        self.phone_pattern = re.compile(phone_pattern)
        self.today = today

    def validate_window(self, kind: EntityKind, window: Optional[CandidateWindow]) -> FieldErrors:
        if window is None:
            return {"window": "Please select a date"}
        if kind.uses_range and not window.is_range:
            return {"window": "Rentals need a start and end date"}
        if not kind.uses_range and window.is_range:
            return {"window": f"A {kind.value} is for a single date"}
        problem = self.calendar.window_problem(window, self.today())
        if problem:
            return {"window": problem}
        return {}

    def validate_information(self, draft: BookingDraft) -> FieldErrors:
        errors: FieldErrors = {}
        customer = draft.customer

        if not customer.name.strip():
            errors["customer.name"] = "Name is required"

        phone = customer.phone_number.strip()
        if not phone:
            errors["customer.phone_number"] = "Phone number is required"
        elif not self.phone_pattern.match(phone):
            errors["customer.phone_number"] = "Phone number must be 11 digits starting with 09"

        email = customer.email.strip()
        if email and not EMAIL_PATTERN.match(email):
            errors["customer.email"] = "Email address is not valid"

        for part in ("province", "city", "barangay", "street"):
            if not getattr(customer.address, part).strip():
                errors[f"customer.address.{part}"] = f"{part.capitalize()} is required"

        errors.update(self.validate_window(draft.kind, draft.window))

        if draft.kind == EntityKind.APPOINTMENT and draft.time_block is None:
            errors["time_block"] = "Please choose a morning or afternoon slot"

        return errors

    def validate_items(self, draft: BookingDraft) -> FieldErrors:
        """Structural item checks only; availability is the verifier's job"""
        if not draft.line_items:
            return {"line_items": "Add at least one item"}
        errors: FieldErrors = {}
        for line in draft.line_items:
            if line.quantity < 1:
                errors[f"line_items.{line.line_id}.quantity"] = "Quantity must be at least 1"
        return errors

    def validate_payment(self, draft: BookingDraft, snapshot: FinancialSnapshot) -> FieldErrors:
        if snapshot.grand_total <= ZERO:
            return {}

        errors: FieldErrors = {}
        payment = draft.payment
        if payment.amount is None:
            errors["payment.amount"] = "Payment amount is required"
        elif payment.amount < snapshot.minimum_payment:
            errors["payment.amount"] = f"Minimum payment is {snapshot.minimum_payment}"
        elif payment.amount > snapshot.grand_total:
            errors["payment.amount"] = f"Payment cannot exceed the total of {snapshot.grand_total}"

        if payment.method is None:
            errors["payment.method"] = "Choose a payment method"
        if not payment.reference_number.strip():
            errors["payment.reference_number"] = "Reference number is required"
        return errors

    def validate_for_commit(self, draft: BookingDraft, snapshot: FinancialSnapshot) -> FieldErrors:
        errors: FieldErrors = {}
        errors.update(self.validate_information(draft))
        errors.update(self.validate_items(draft))
        errors.update(self.validate_payment(draft, snapshot))
        return errors
