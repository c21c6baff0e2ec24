"""
Wizard Step Gate

Decides whether the user may leave a step going forward. Going back is always
allowed. The gate never moves review -> finish; a successful commit does.
"""

import logging
from typing import Optional

from booking.drafts.models import BookingDraft
from booking.drafts.validation import DraftValidator
from booking.financials.models import FinancialSnapshot
from booking.verification.models import VerificationResult, VerificationState

from .models import STEP_ORDER, BlockedReason, StepValidation, WizardStep

logger = logging.getLogger(__name__)

_BLOCKED_BY_STATE = {
    VerificationState.UNCHECKED: BlockedReason.UNCHECKED,
    VerificationState.DEBOUNCING: BlockedReason.CHECKING,
    VerificationState.CHECKING: BlockedReason.CHECKING,
    VerificationState.CHECK_FAILED: BlockedReason.CHECK_FAILED,
    VerificationState.CONFLICTS: BlockedReason.CONFLICTS,
}


class WizardStepGate:
    """Tracks the current step and validates transitions"""

    def __init__(self, validator: Optional[DraftValidator] = None, start: WizardStep = WizardStep.REMINDERS):
        self.validator = validator or DraftValidator()
        self.current = start

    def validate(
        self,
        step: WizardStep,
        draft: BookingDraft,
        verification: VerificationResult,
        snapshot: FinancialSnapshot,
    ) -> StepValidation:
        if step == WizardStep.INFORMATION:
            return self._from_errors(step, self.validator.validate_information(draft))

        if step == WizardStep.ITEMS:
            return self._validate_items(draft, verification)

        if step == WizardStep.PAYMENT:
            return self._from_errors(step, self.validator.validate_payment(draft, snapshot))

        if step == WizardStep.REVIEW:
            # Availability is re-checked by the commit itself
            return self._from_errors(step, self.validator.validate_for_commit(draft, snapshot))

        return StepValidation(step=step)

    def _validate_items(self, draft: BookingDraft, verification: VerificationResult) -> StepValidation:
        errors = self.validator.validate_items(draft)
        if errors:
            return self._from_errors(WizardStep.ITEMS, errors)

        if verification.state == VerificationState.SATISFIABLE:
            return StepValidation(step=WizardStep.ITEMS)

        return StepValidation(
            step=WizardStep.ITEMS,
            is_valid=False,
            blocked_reason=_BLOCKED_BY_STATE[verification.state],
            unavailable=list(verification.unavailable),
        )

    @staticmethod
    def _from_errors(step: WizardStep, errors) -> StepValidation:
        return StepValidation(step=step, is_valid=not errors, field_errors=dict(errors))

    # ====================
    # Navigation
    # ====================

    def advance(
        self,
        draft: BookingDraft,
        verification: VerificationResult,
        snapshot: FinancialSnapshot,
    ) -> StepValidation:
        """Move forward one step if the current one validates"""
        validation = self.validate(self.current, draft, verification, snapshot)
        if not validation.is_valid:
            logger.debug(f"Step {self.current.value} blocked: {validation.message}")
            return validation
        if self.current in (WizardStep.REVIEW, WizardStep.FINISH):
            return validation
        self.current = STEP_ORDER[self.current.position + 1]
        return validation

    def back(self) -> WizardStep:
        if WizardStep.REMINDERS.position < self.current.position < WizardStep.FINISH.position:
            self.current = STEP_ORDER[self.current.position - 1]
        return self.current

    def route_to(self, step: WizardStep) -> None:
        logger.info(f"Routing wizard from {self.current.value} to {step.value}")
        self.current = step
