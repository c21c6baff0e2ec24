"""
Financials

Subtotal, deposit and default payment derived from the line-item set.
"""

from .models import CENTS, ZERO, FinancialSnapshot, PaymentMethod, PaymentSelection, to_cents
from .policy import DepositPolicy, StandardDepositPolicy
from .recalculator import FinancialRecalculator

__all__ = [
    "CENTS",
    "ZERO",
    "FinancialSnapshot",
    "PaymentMethod",
    "PaymentSelection",
    "to_cents",
    "DepositPolicy",
    "StandardDepositPolicy",
    "FinancialRecalculator",
]
