"""
Drafts

The in-progress booking and its local validation.
"""

from .models import (
    STATUS_ENUMS,
    RESCHEDULABLE_STATUSES,
    TERMINAL_STATUSES,
    Address,
    AppointmentStatus,
    BookedEntity,
    BookingDraft,
    CustomerInfo,
    EntityKind,
    RentalStatus,
    ReservationStatus,
    TimeBlock,
)
from .validation import DraftValidator, FieldErrors

__all__ = [
    "STATUS_ENUMS",
    "RESCHEDULABLE_STATUSES",
    "TERMINAL_STATUSES",
    "Address",
    "AppointmentStatus",
    "BookedEntity",
    "BookingDraft",
    "CustomerInfo",
    "EntityKind",
    "RentalStatus",
    "ReservationStatus",
    "TimeBlock",
    "DraftValidator",
    "FieldErrors",
]
