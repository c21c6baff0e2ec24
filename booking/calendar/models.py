"""
Closure Calendar Data Models
"""

from datetime import date
from typing import Dict, FrozenSet, Iterable, Optional

from pydantic import AliasChoices, BaseModel, Field

from booking.availability.models import CandidateWindow

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


class ClosureDay(BaseModel):
    """One shop-declared unavailable date"""
    day: date = Field(..., validation_alias=AliasChoices("day", "date"))
    reason: str = ""


class ClosureCalendar:
    """
    Advisory calendar of days the shop cannot serve

    Used by pickers and local validation only; the availability check at
    commit stays authoritative.
    """

    def __init__(
        self,
        closures: Iterable[ClosureDay] = (),
        closed_weekdays: FrozenSet[int] = frozenset({6}),
    ):
        self.closed_weekdays = frozenset(closed_weekdays)
        self._closures: Dict[date, str] = {c.day: c.reason for c in closures}

    def __len__(self) -> int:
        return len(self._closures)

    def is_closed(self, day: date) -> bool:
        return day.weekday() in self.closed_weekdays or day in self._closures

    def reason_for(self, day: date) -> Optional[str]:
        if day in self._closures:
            return self._closures[day] or "Unavailable"
        if day.weekday() in self.closed_weekdays:
            return f"Closed on {WEEKDAY_NAMES[day.weekday()]}s"
        return None

    def is_selectable(self, day: date, today: date) -> bool:
        return day >= today and not self.is_closed(day)

    def window_problem(self, window: CandidateWindow, today: date) -> Optional[str]:
        """Why this window cannot be picked, or None

        Only the first day is checked: a multi-day rental may span a closed day.
        """
        if window.start_date < today:
            return "Date cannot be in the past"
        return self.reason_for(window.start_date)
