"""
Calendar Protocols (Interfaces)
"""
from typing import List, Optional, Protocol, runtime_checkable

from .models import ClosureDay


class CalendarServiceError(Exception):
    """Closure dates could not be loaded"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


@runtime_checkable
class CalendarClientProtocol(Protocol):
    """Interface for the unavailable-dates collaborator"""

    async def list_closures(self) -> List[ClosureDay]:
        ...
