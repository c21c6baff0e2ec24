"""
Wizard Data Models
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from booking.availability.models import UnavailableLine


class WizardStep(str, Enum):
    """Booking wizard steps, in order"""
    REMINDERS = "reminders"
    INFORMATION = "information"
    ITEMS = "items"
    PAYMENT = "payment"
    REVIEW = "review"
    FINISH = "finish"

    @property
    def position(self) -> int:
        return STEP_ORDER.index(self)


STEP_ORDER = list(WizardStep)


class BlockedReason(str, Enum):
    """Why the items step cannot proceed even though the cart is well formed"""
    UNCHECKED = "unchecked"
    CHECKING = "checking"
    CHECK_FAILED = "check_failed"
    CONFLICTS = "conflicts"


BLOCKED_MESSAGES = {
    BlockedReason.UNCHECKED: "Availability has not been checked yet",
    BlockedReason.CHECKING: "Checking availability...",
    BlockedReason.CHECK_FAILED: "Could not check availability. Please retry.",
    BlockedReason.CONFLICTS: "Some items are not available for the selected date",
}


class StepValidation(BaseModel):
    """Whether a step may be left going forward, and what is wrong if not"""
    step: WizardStep
    is_valid: bool = True
    field_errors: Dict[str, str] = Field(default_factory=dict)
    blocked_reason: Optional[BlockedReason] = None
    unavailable: List[UnavailableLine] = Field(default_factory=list)

    @property
    def message(self) -> Optional[str]:
        if self.blocked_reason is not None:
            return BLOCKED_MESSAGES[self.blocked_reason]
        if self.field_errors:
            return "Please fix the highlighted fields"
        return None

    def describe_unavailable(self) -> List[str]:
        return [line.describe() for line in self.unavailable]
