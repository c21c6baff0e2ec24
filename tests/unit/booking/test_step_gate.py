"""
Unit Tests for the wizard step gate
"""
from datetime import date

import pytest

from booking.availability.models import CandidateWindow
from booking.verification.models import VerificationResult, VerificationState
from booking.wizard.gate import WizardStepGate
from booking.wizard.models import BlockedReason, WizardStep
from tests.fixtures import make_customer, make_draft, make_line, make_unavailable

SATISFIABLE = VerificationResult(state=VerificationState.SATISFIABLE, generation=1)


@pytest.fixture
def gate(validator) -> WizardStepGate:
    return WizardStepGate(validator)


class TestItemsStep:

    def test_conflict_lists_exact_line(self, gate, recalculator):
        """Conflict on 2025-06-01: A requested 2, available 1"""
        draft = make_draft(
            items=[make_line(quantity=2)],
            window=CandidateWindow.single(date(2025, 6, 1)),
        )
        conflict = make_unavailable(requested=2, available=1)
        verification = VerificationResult(
            state=VerificationState.CONFLICTS, generation=3, unavailable=[conflict],
        )

        validation = gate.validate(WizardStep.ITEMS, draft, verification, recalculator.calculate(draft.line_items))

        assert not validation.is_valid
        assert validation.blocked_reason == BlockedReason.CONFLICTS
        assert validation.unavailable == [conflict]
        assert validation.describe_unavailable() == ["Ivory Ball Gown (Ivory, M): requested 2, available 1"]

    @pytest.mark.parametrize("state,reason", [
        (VerificationState.UNCHECKED, BlockedReason.UNCHECKED),
        (VerificationState.DEBOUNCING, BlockedReason.CHECKING),
        (VerificationState.CHECKING, BlockedReason.CHECKING),
        (VerificationState.CHECK_FAILED, BlockedReason.CHECK_FAILED),
    ])
    def test_unresolved_verification_blocks(self, gate, recalculator, state, reason):
        draft = make_draft()
        validation = gate.validate(
            WizardStep.ITEMS, draft, VerificationResult(state=state), recalculator.calculate(draft.line_items),
        )
        assert validation.blocked_reason == reason
        assert validation.message

    def test_satisfiable_passes(self, gate, recalculator):
        draft = make_draft()
        assert gate.validate(WizardStep.ITEMS, draft, SATISFIABLE, recalculator.calculate(draft.line_items)).is_valid

    def test_empty_cart_is_field_error_not_block(self, gate, recalculator):
        draft = make_draft(items=[])
        validation = gate.validate(WizardStep.ITEMS, draft, SATISFIABLE, recalculator.calculate([]))
        assert validation.blocked_reason is None
        assert "line_items" in validation.field_errors


class TestNavigation:

    def test_advance_through_steps(self, gate, recalculator):
        draft = make_draft()
        snapshot = recalculator.calculate(draft.line_items)
        visited = [gate.current]
        for _ in range(6):
            gate.advance(draft, SATISFIABLE, snapshot)
            visited.append(gate.current)
        assert visited[:5] == [
            WizardStep.REMINDERS, WizardStep.INFORMATION, WizardStep.ITEMS, WizardStep.PAYMENT, WizardStep.REVIEW,
        ]
        # Only a successful commit leaves review
        assert visited[-1] == WizardStep.REVIEW

    def test_invalid_step_does_not_advance(self, gate, recalculator):
        gate.route_to(WizardStep.INFORMATION)
        draft = make_draft(customer=make_customer(name=""))
        validation = gate.advance(draft, SATISFIABLE, recalculator.calculate(draft.line_items))
        assert not validation.is_valid
        assert gate.current == WizardStep.INFORMATION

    def test_back(self, gate):
        gate.route_to(WizardStep.PAYMENT)
        assert gate.back() == WizardStep.ITEMS
        gate.route_to(WizardStep.REMINDERS)
        assert gate.back() == WizardStep.REMINDERS
        gate.route_to(WizardStep.FINISH)
        assert gate.back() == WizardStep.FINISH
