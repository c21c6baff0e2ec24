"""
Wizard

Step gate, booking session and reschedule session.
"""

from .models import BLOCKED_MESSAGES, STEP_ORDER, BlockedReason, StepValidation, WizardStep
from .protocols import ConfirmationPrompt
from .gate import WizardStepGate
from .session import WINDOW_CHANGE_PROMPT, BookingSession
from .reschedule import RescheduleSession

__all__ = [
    "BLOCKED_MESSAGES",
    "STEP_ORDER",
    "BlockedReason",
    "StepValidation",
    "WizardStep",
    "ConfirmationPrompt",
    "WizardStepGate",
    "WINDOW_CHANGE_PROMPT",
    "BookingSession",
    "RescheduleSession",
]
