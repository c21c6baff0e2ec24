"""
Financial Recalculator

Pure Decimal arithmetic: same items in, bit-identical snapshot out.
"""

import logging
from decimal import Decimal
from typing import Iterable, Optional

from .models import ZERO, FinancialSnapshot, PaymentSelection, to_cents
from .policy import DepositPolicy, StandardDepositPolicy

logger = logging.getLogger(__name__)


class FinancialRecalculator:
    """Derives totals and the default payment from line items"""

    def __init__(
        self,
        policy: Optional[DepositPolicy] = None,
        down_payment_ratio: Decimal = Decimal("0.5"),
    ):
        self.policy = policy or StandardDepositPolicy()
        self.down_payment_ratio = Decimal(down_payment_ratio)

    def calculate(self, items: Iterable) -> FinancialSnapshot:
        lines = list(items)
        subtotal = sum((to_cents(line.line_total) for line in lines), ZERO)
        deposit = sum((to_cents(self.policy.deposit_for(line)) for line in lines), ZERO)
        grand_total = subtotal + deposit
        default_payment = to_cents(grand_total * self.down_payment_ratio)
        return FinancialSnapshot(
            subtotal=subtotal,
            required_deposit=deposit,
            grand_total=grand_total,
            default_payment_amount=default_payment,
            minimum_payment=default_payment,
        )

    def reconcile_payment(
        self,
        payment: PaymentSelection,
        previous: Optional[FinancialSnapshot],
        current: FinancialSnapshot,
    ) -> PaymentSelection:
        """
        Carry the staged payment across a recalculation

        A payment still sitting on a preset (the previous default, or the
        previous grand total) follows that preset. Anything else is a manual
        override and is kept as entered.
        """
        if current.is_free:
            return payment.model_copy(update={"amount": None, "reference_number": ""})

        if payment.amount is None:
            return payment.model_copy(update={"amount": current.default_payment_amount})

        if previous is not None:
            if payment.amount == previous.default_payment_amount:
                return payment.model_copy(update={"amount": current.default_payment_amount})
            if payment.amount == previous.grand_total:
                return payment.model_copy(update={"amount": current.grand_total})

        logger.debug(f"Keeping manual payment amount {payment.amount}")
        return payment

    def reset_payment(self, payment: PaymentSelection, current: FinancialSnapshot) -> PaymentSelection:
        """Back to the default amount with no reference number"""
        amount = None if current.is_free else current.default_payment_amount
        return payment.model_copy(update={"amount": amount, "reference_number": ""})
