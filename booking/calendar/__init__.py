"""
Calendar

Closure days (closed weekdays plus shop-declared dates).
"""

from .models import ClosureCalendar, ClosureDay
from .protocols import CalendarClientProtocol, CalendarServiceError
from .client import CalendarClient

__all__ = [
    "ClosureCalendar",
    "ClosureDay",
    "CalendarClientProtocol",
    "CalendarServiceError",
    "CalendarClient",
]
