"""
Availability Data Models

Candidate windows, unavailable-line reports and the request/response
envelopes of the external Availability Service.
"""

from datetime import date, timedelta
from typing import Any, Dict, Iterator, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from booking.line_items.models import LineItem, LineItemKind


class CandidateWindow(BaseModel):
    """A single day (reservation, appointment) or inclusive date range (rental)"""
    model_config = ConfigDict(frozen=True)

    start_date: date
    end_date: Optional[date] = None

    @model_validator(mode="after")
    def _check_order(self) -> 'CandidateWindow':
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError(
                f"Window end ({self.end_date}) cannot be before its start ({self.start_date})"
            )
        return self

    @classmethod
    def single(cls, day: date) -> 'CandidateWindow':
        return cls(start_date=day)

    @classmethod
    def spanning(cls, start: date, days: int) -> 'CandidateWindow':
        """Inclusive window of `days` days starting at `start`"""
        if days < 1:
            raise ValueError("A window spans at least one day")
        return cls(start_date=start, end_date=start + timedelta(days=days - 1))

    @property
    def is_range(self) -> bool:
        return self.end_date is not None

    @property
    def last_date(self) -> date:
        return self.end_date or self.start_date

    @property
    def days(self) -> int:
        return (self.last_date - self.start_date).days + 1

    def dates(self) -> Iterator[date]:
        for offset in range(self.days):
            yield self.start_date + timedelta(days=offset)

    def to_payload(self) -> Dict[str, str]:
        if self.end_date is None:
            return {"date": self.start_date.isoformat()}
        return {
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
        }

    def __str__(self) -> str:
        if self.end_date is None:
            return self.start_date.isoformat()
        return f"{self.start_date.isoformat()}..{self.end_date.isoformat()}"


class UnavailableLine(BaseModel):
    """One requested resource the service cannot satisfy"""
    model_config = ConfigDict(frozen=True)

    resource_id: Optional[str] = None
    name: Optional[str] = None
    variation_label: str = ""
    # Legacy conflict payloads carry no quantities
    requested_qty: Optional[int] = None
    available_qty: Optional[int] = None

    @property
    def shortfall(self) -> Optional[int]:
        if self.requested_qty is None or self.available_qty is None:
            return None
        return max(self.requested_qty - self.available_qty, 0)

    def describe(self) -> str:
        subject = self.name or self.resource_id or "Unknown item"
        if self.variation_label:
            subject = f"{subject} ({self.variation_label})"
        if self.requested_qty is not None and self.available_qty is not None:
            return f"{subject}: requested {self.requested_qty}, available {self.available_qty}"
        return f"{subject} is unavailable"


class AvailabilityRequestItem(BaseModel):
    """Wire form of one line item in an availability query"""
    resource_id: str
    kind: LineItemKind
    name: str = ""
    variation: Dict[str, Optional[str]] = Field(default_factory=dict)
    variation_label: str = ""
    quantity: int = Field(..., ge=1)

    @classmethod
    def from_line(cls, line: LineItem) -> 'AvailabilityRequestItem':
        return cls(
            resource_id=line.resource_id,
            kind=line.kind,
            name=line.name,
            variation=line.variation.model_dump(),
            variation_label=line.variation_label,
            quantity=line.quantity,
        )


class AvailabilityCheckRequest(BaseModel):
    """Body of the availability query"""
    window: Dict[str, str]
    items: List[AvailabilityRequestItem]
    exclude_entity_id: Optional[str] = None

    @classmethod
    def build(
        cls,
        window: CandidateWindow,
        items: List[LineItem],
        exclude_entity_id: Optional[str] = None,
    ) -> 'AvailabilityCheckRequest':
        return cls(
            window=window.to_payload(),
            items=[AvailabilityRequestItem.from_line(i) for i in items],
            exclude_entity_id=exclude_entity_id,
        )

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class AvailabilityCheckResponse(BaseModel):
    """Normalized answer: an empty list means fully satisfiable"""
    unavailable: List[UnavailableLine] = Field(default_factory=list)

    @property
    def is_satisfiable(self) -> bool:
        return not self.unavailable
