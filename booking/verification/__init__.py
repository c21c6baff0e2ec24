"""
Verification

Debounced, generation-guarded availability checking for a draft.
"""

from .models import PENDING_STATES, VerificationResult, VerificationState
from .verifier import DebouncedVerifier

__all__ = [
    "PENDING_STATES",
    "VerificationResult",
    "VerificationState",
    "DebouncedVerifier",
]
