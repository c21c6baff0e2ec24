"""
Financial Data Models
"""

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


def to_cents(value) -> Decimal:
    """Quantize any numeric value to two decimal places"""
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


class PaymentMethod(str, Enum):
    """Accepted payment channels"""
    CASH = "Cash"
    GCASH = "GCash"
    BANK_TRANSFER = "Bank Transfer"


class FinancialSnapshot(BaseModel):
    """Totals derived from the line-item set"""
    model_config = ConfigDict(frozen=True)

    subtotal: Decimal = ZERO
    required_deposit: Decimal = ZERO
    grand_total: Decimal = ZERO
    default_payment_amount: Decimal = ZERO
    minimum_payment: Decimal = ZERO

    @field_validator("*", mode="after")
    @classmethod
    def _quantize(cls, value: Decimal) -> Decimal:
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)

    @property
    def is_free(self) -> bool:
        return self.grand_total == ZERO


class PaymentSelection(BaseModel):
    """Staged payment; amount None means the user has not chosen one"""
    model_config = ConfigDict(frozen=True)

    amount: Optional[Decimal] = Field(default=None, ge=0)
    method: Optional[PaymentMethod] = None
    reference_number: str = ""

    @field_validator("amount", mode="after")
    @classmethod
    def _quantize_amount(cls, value: Optional[Decimal]) -> Optional[Decimal]:
        return None if value is None else value.quantize(CENTS, rounding=ROUND_HALF_UP)
