"""
Commit Protocols (Interfaces)

Contracts for dependency injection. NO import-time I/O dependencies.
"""
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from booking.availability.models import CandidateWindow, UnavailableLine
from booking.drafts.models import BookedEntity, EntityKind


# ============================================================================
# Custom Exceptions
# ============================================================================

class CommitError(Exception):
    """Base exception for authoritative writes"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class CommitConflictError(CommitError):
    """The server's in-transaction availability check failed (HTTP 409)"""

    def __init__(self, unavailable: List[UnavailableLine], message: str = "Some items are no longer available"):
        super().__init__(message, status_code=409)
        self.unavailable = list(unavailable)


class CommitRejectedError(CommitError):
    """The server refused the request (4xx other than 409)"""
    pass


class CommitTransportError(CommitError):
    """Network failure, server error or unreadable response"""
    pass


# ============================================================================
# Client Protocol
# ============================================================================

@runtime_checkable
class CommitClientProtocol(Protocol):
    """Authoritative booking endpoints; each re-checks availability server-side"""

    async def create(self, kind: EntityKind, payload: Dict[str, Any]) -> BookedEntity:
        ...

    async def reschedule(
        self, kind: EntityKind, entity_id: str, window: CandidateWindow, payload: Optional[Dict[str, Any]] = None,
    ) -> BookedEntity:
        ...

    async def convert(self, reservation_id: str, payload: Optional[Dict[str, Any]] = None) -> BookedEntity:
        ...

    async def cancel(self, kind: EntityKind, entity_id: str, reason: str) -> BookedEntity:
        ...
