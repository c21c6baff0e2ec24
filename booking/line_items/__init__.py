"""
Line items

Requested resources (inventory variations, packages, custom-tailoring slots)
and the cart operations that mutate them.
"""

from .models import LineItem, LineItemKind, VariationKey
from .cart import (
    LineItemNotFoundError,
    add_line,
    cart_fingerprint,
    find_line,
    flag_unavailable,
    remove_flagged,
    remove_line,
    replace_line,
    update_quantity,
)

__all__ = [
    "LineItem",
    "LineItemKind",
    "VariationKey",
    "LineItemNotFoundError",
    "add_line",
    "cart_fingerprint",
    "find_line",
    "flag_unavailable",
    "remove_flagged",
    "remove_line",
    "replace_line",
    "update_quantity",
]
