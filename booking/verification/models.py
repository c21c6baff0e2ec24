"""
Verification Data Models
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from booking.availability.models import UnavailableLine


class VerificationState(str, Enum):
    """Where the incremental availability check currently stands"""
    UNCHECKED = "unchecked"
    DEBOUNCING = "debouncing"
    CHECKING = "checking"
    SATISFIABLE = "satisfiable"
    CONFLICTS = "conflicts"
    CHECK_FAILED = "check_failed"


PENDING_STATES = frozenset({
    VerificationState.UNCHECKED,
    VerificationState.DEBOUNCING,
    VerificationState.CHECKING,
})


class VerificationResult(BaseModel):
    """Outcome of the check for one generation of the draft"""
    state: VerificationState = VerificationState.UNCHECKED
    generation: int = 0
    unavailable: List[UnavailableLine] = Field(default_factory=list)
    error_message: Optional[str] = None

    @property
    def is_satisfiable(self) -> bool:
        return self.state == VerificationState.SATISFIABLE

    @property
    def is_pending(self) -> bool:
        return self.state in PENDING_STATES

    @property
    def has_conflicts(self) -> bool:
        return self.state == VerificationState.CONFLICTS
