"""
Commit

Authoritative check-and-write for creation, reschedule, conversion and
cancellation.
"""

from .models import CommitOperation, CommitOutcome, CommitResult
from .protocols import (
    CommitClientProtocol,
    CommitConflictError,
    CommitError,
    CommitRejectedError,
    CommitTransportError,
)
from .client import BookingApiClient
from .coordinator import CommitCoordinator, CommitInProgressError

__all__ = [
    "CommitOperation",
    "CommitOutcome",
    "CommitResult",
    "CommitClientProtocol",
    "CommitConflictError",
    "CommitError",
    "CommitRejectedError",
    "CommitTransportError",
    "BookingApiClient",
    "CommitCoordinator",
    "CommitInProgressError",
]
