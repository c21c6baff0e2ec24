"""
Availability

Client and data types for the external Availability Service.
"""

from .models import (
    AvailabilityCheckRequest,
    AvailabilityCheckResponse,
    AvailabilityRequestItem,
    CandidateWindow,
    UnavailableLine,
)
from .conflicts import MalformedConflictPayload, normalize_unavailable
from .protocols import AvailabilityClientProtocol, AvailabilityServiceError
from .client import AvailabilityClient

__all__ = [
    "AvailabilityCheckRequest",
    "AvailabilityCheckResponse",
    "AvailabilityRequestItem",
    "CandidateWindow",
    "UnavailableLine",
    "MalformedConflictPayload",
    "normalize_unavailable",
    "AvailabilityClientProtocol",
    "AvailabilityServiceError",
    "AvailabilityClient",
]
