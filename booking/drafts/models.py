"""
Booking Draft Data Models

The client-side draft being edited in the wizard, and the server's canonical
entity returned by a successful commit.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from booking.availability.models import CandidateWindow
from booking.financials.models import FinancialSnapshot, PaymentSelection
from booking.line_items.models import LineItem


class EntityKind(str, Enum):
    """Kinds of commitment a customer can make"""
    RESERVATION = "reservation"
    RENTAL = "rental"
    APPOINTMENT = "appointment"

    @property
    def collection(self) -> str:
        """URL collection segment, e.g. 'rentals'"""
        return f"{self.value}s"

    @property
    def uses_range(self) -> bool:
        return self == EntityKind.RENTAL


class ReservationStatus(str, Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class RentalStatus(str, Enum):
    PENDING = "Pending"
    TO_PROCESS = "To Process"
    TO_PICKUP = "To Pickup"
    TO_RETURN = "To Return"
    RETURNED = "Returned"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class AppointmentStatus(str, Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


STATUS_ENUMS = {
    EntityKind.RESERVATION: ReservationStatus,
    EntityKind.RENTAL: RentalStatus,
    EntityKind.APPOINTMENT: AppointmentStatus,
}

# Statuses after which a booking can no longer be rescheduled or cancelled
TERMINAL_STATUSES = frozenset({"Completed", "Cancelled", "Returned"})

# Statuses from which the booking date may still be moved
RESCHEDULABLE_STATUSES = {
    EntityKind.RESERVATION: frozenset({ReservationStatus.PENDING.value, ReservationStatus.CONFIRMED.value}),
    EntityKind.RENTAL: frozenset({RentalStatus.PENDING.value, RentalStatus.TO_PICKUP.value}),
    EntityKind.APPOINTMENT: frozenset({AppointmentStatus.PENDING.value, AppointmentStatus.CONFIRMED.value}),
}


class TimeBlock(str, Enum):
    """Appointment slot"""
    MORNING = "morning"
    AFTERNOON = "afternoon"


class Address(BaseModel):
    province: str = ""
    city: str = ""
    barangay: str = ""
    street: str = ""


class CustomerInfo(BaseModel):
    """Contact details; preserved across conflicts"""
    name: str = ""
    phone_number: str = ""
    email: str = ""
    address: Address = Field(default_factory=Address)


class BookingDraft(BaseModel):
    """Everything the user has entered so far"""
    kind: EntityKind
    entity_id: Optional[str] = None
    status: Optional[str] = None
    customer: CustomerInfo = Field(default_factory=CustomerInfo)
    window: Optional[CandidateWindow] = None
    line_items: List[LineItem] = Field(default_factory=list)
    notes: str = ""
    payment: PaymentSelection = Field(default_factory=PaymentSelection)
    time_block: Optional[TimeBlock] = None
    financials: Optional[FinancialSnapshot] = None

    @property
    def is_persisted(self) -> bool:
        return self.entity_id is not None

    def to_payload(self) -> Dict[str, Any]:
        """Request body for the create endpoints"""
        payload: Dict[str, Any] = {
            "customer": self.customer.model_dump(),
            "window": self.window.to_payload() if self.window else None,
            "items": [
                {
                    "line_id": line.line_id,
                    "kind": line.kind.value,
                    "resource_id": line.resource_id,
                    "name": line.name,
                    "variation": line.variation.model_dump(),
                    "quantity": line.quantity,
                    "unit_price": str(line.unit_price),
                    "rent_back": line.rent_back,
                }
                for line in self.line_items
            ],
            "notes": self.notes,
            "payment": {
                "amount": str(self.payment.amount) if self.payment.amount is not None else None,
                "method": self.payment.method.value if self.payment.method else None,
                "reference_number": self.payment.reference_number,
            },
        }
        if self.kind == EntityKind.APPOINTMENT and self.time_block is not None:
            payload["time_block"] = self.time_block.value
        return payload


def _window_from(data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    start = data.get("start_date") or data.get("startDate") or data.get("date")
    if not start:
        return None
    end = data.get("end_date") or data.get("endDate")
    return {"start_date": start, "end_date": end}


class BookedEntity(BaseModel):
    """Canonical entity as returned by the booking API"""
    model_config = ConfigDict(populate_by_name=True)

    entity_id: str = Field(..., validation_alias=AliasChoices("entity_id", "id", "_id"))
    kind: EntityKind
    status: str
    window: Optional[CandidateWindow] = None
    line_items: List[LineItem] = Field(
        default_factory=list, validation_alias=AliasChoices("line_items", "items"),
    )
    customer: Optional[CustomerInfo] = None
    financials: Optional[FinancialSnapshot] = None
    updated_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def _flatten_window(cls, data):
        if isinstance(data, dict) and data.get("window") is None:
            window = _window_from(data)
            if window is not None:
                data = {**data, "window": window}
        elif isinstance(data, dict) and isinstance(data.get("window"), dict):
            window = _window_from(data["window"])
            if window is not None:
                data = {**data, "window": window}
        return data

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def is_reschedulable(self) -> bool:
        return self.status in RESCHEDULABLE_STATUSES[self.kind]
