"""
Deposit policies

The deposit rule is a collaborator of the recalculator, not part of it.
"""

from decimal import Decimal
from typing import Optional, Protocol, runtime_checkable

from core.config import FinancialConfig
from booking.line_items.models import LineItem, LineItemKind

from .models import ZERO, to_cents


@runtime_checkable
class DepositPolicy(Protocol):
    """Required deposit for one line (already multiplied by quantity)"""

    def deposit_for(self, line: LineItem) -> Decimal:
        ...


class StandardDepositPolicy:
    """
    Shop deposit rules

    - items: min(unit_price * item_rate, item_cap) per unit
    - packages: flat fee per unit
    - custom tailoring rented back: full price; other custom lines: none
    """

    def __init__(
        self,
        item_rate: Decimal = Decimal("1"),
        item_cap: Optional[Decimal] = Decimal("500"),
        package_flat: Decimal = Decimal("2000"),
        custom_rent_back_full_price: bool = True,
    ):
        self.item_rate = Decimal(item_rate)
        self.item_cap = None if item_cap is None else Decimal(item_cap)
        self.package_flat = Decimal(package_flat)
        self.custom_rent_back_full_price = custom_rent_back_full_price

    @classmethod
    def from_config(cls, config: FinancialConfig) -> 'StandardDepositPolicy':
        return cls(
            item_rate=config.item_deposit_rate,
            item_cap=config.item_deposit_cap,
            package_flat=config.package_deposit,
            custom_rent_back_full_price=config.custom_rent_back_full_price,
        )

    def deposit_for(self, line: LineItem) -> Decimal:
        if line.kind == LineItemKind.PACKAGE:
            return to_cents(self.package_flat * line.quantity)
        if line.kind == LineItemKind.CUSTOM:
            if line.rent_back and self.custom_rent_back_full_price:
                return to_cents(line.unit_price * line.quantity)
            return ZERO
        per_unit = line.unit_price * self.item_rate
        if self.item_cap is not None:
            per_unit = min(per_unit, self.item_cap)
        return to_cents(per_unit * line.quantity)
