"""
Commit Data Models
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from booking.availability.models import UnavailableLine
from booking.drafts.models import BookedEntity


class CommitOutcome(str, Enum):
    SUCCESS = "success"
    CONFLICT = "conflict"
    VALIDATION_FAILED = "validation_failed"
    FAILED = "failed"


class CommitOperation(str, Enum):
    CREATE = "create"
    RESCHEDULE = "reschedule"
    CONVERT = "convert"
    CANCEL = "cancel"


class CommitResult(BaseModel):
    """Classified outcome of one authoritative write"""
    outcome: CommitOutcome
    operation: CommitOperation
    entity: Optional[BookedEntity] = None
    unavailable: List[UnavailableLine] = Field(default_factory=list)
    field_errors: Dict[str, str] = Field(default_factory=dict)
    message: Optional[str] = None
    error_code: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.outcome == CommitOutcome.SUCCESS

    @classmethod
    def success(cls, operation: CommitOperation, entity: BookedEntity) -> 'CommitResult':
        return cls(outcome=CommitOutcome.SUCCESS, operation=operation, entity=entity)

    @classmethod
    def conflict(cls, operation: CommitOperation, unavailable: List[UnavailableLine], message: Optional[str] = None) -> 'CommitResult':
        return cls(
            outcome=CommitOutcome.CONFLICT,
            operation=operation,
            unavailable=list(unavailable),
            message=message or "Some items are no longer available",
            error_code="CONFLICT",
        )

    @classmethod
    def invalid(cls, operation: CommitOperation, field_errors: Dict[str, str]) -> 'CommitResult':
        return cls(
            outcome=CommitOutcome.VALIDATION_FAILED,
            operation=operation,
            field_errors=dict(field_errors),
            message="Please fix the highlighted fields",
            error_code="VALIDATION_FAILED",
        )

    @classmethod
    def failed(cls, operation: CommitOperation, message: str, error_code: str = "FAILED") -> 'CommitResult':
        return cls(outcome=CommitOutcome.FAILED, operation=operation, message=message, error_code=error_code)
