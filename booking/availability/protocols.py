"""
Availability Protocols (Interfaces)

Contracts for dependency injection. NO import-time I/O dependencies.
"""
from typing import List, Optional, Protocol, runtime_checkable

from booking.line_items.models import LineItem

from .models import AvailabilityCheckResponse, CandidateWindow


# ============================================================================
# Custom Exceptions
# ============================================================================

class AvailabilityServiceError(Exception):
    """The availability check could not be completed (transport, status, payload)"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


# ============================================================================
# Client Protocol
# ============================================================================

@runtime_checkable
class AvailabilityClientProtocol(Protocol):
    """
    Interface for the Availability Service client.

    Pure request/response; no retries. Cancelling the awaiting task aborts
    the request and must surface as asyncio.CancelledError, never as an error
    result.
    """

    async def check(
        self,
        window: CandidateWindow,
        items: List[LineItem],
        exclude_entity_id: Optional[str] = None,
    ) -> AvailabilityCheckResponse:
        """Check window + items, ignoring the booking `exclude_entity_id`"""
        ...
