"""
Cart operations

Pure functions over a list of LineItem. Every mutation returns a new list, so
callers can compare before/after and drive recalculation and verification.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from .models import LineItem

logger = logging.getLogger(__name__)


class LineItemNotFoundError(KeyError):
    """No line with the given id in the cart"""
    pass


def find_line(items: Sequence[LineItem], line_id: str) -> Optional[LineItem]:
    return next((i for i in items if i.line_id == line_id), None)


def _index_of(items: Sequence[LineItem], line_id: str) -> int:
    for index, item in enumerate(items):
        if item.line_id == line_id:
            return index
    raise LineItemNotFoundError(line_id)


def add_line(items: Sequence[LineItem], new_line: LineItem) -> List[LineItem]:
    """Add a selection; an identical selection already in the cart absorbs the quantity"""
    updated = list(items)
    for index, existing in enumerate(updated):
        if existing.merge_key == new_line.merge_key:
            updated[index] = existing.model_copy(update={
                "quantity": existing.quantity + new_line.quantity,
                "flagged_unavailable": False,
            })
            logger.debug(f"Merged {new_line.describe()} into line {existing.line_id}")
            return updated
    updated.append(new_line)
    return updated


def replace_line(items: Sequence[LineItem], line_id: str, new_line: LineItem) -> List[LineItem]:
    """Swap a line for an edited selection, keeping its id and position"""
    updated = list(items)
    index = _index_of(updated, line_id)
    updated[index] = new_line.model_copy(update={"line_id": line_id, "flagged_unavailable": False})
    return updated


def update_quantity(items: Sequence[LineItem], line_id: str, quantity: int) -> List[LineItem]:
    """Change a line's quantity; raises ValueError for quantities below 1"""
    if quantity < 1:
        raise ValueError("Quantity must be at least 1")
    updated = list(items)
    index = _index_of(updated, line_id)
    updated[index] = updated[index].model_copy(update={"quantity": quantity, "flagged_unavailable": False})
    return updated


def remove_line(items: Sequence[LineItem], line_id: str) -> List[LineItem]:
    _index_of(items, line_id)
    return [i for i in items if i.line_id != line_id]


def remove_flagged(items: Sequence[LineItem]) -> List[LineItem]:
    return [i for i in items if not i.flagged_unavailable]


def cart_fingerprint(items: Iterable[LineItem]) -> Tuple:
    """Order-independent identity of what is requested (not of prices or flags)"""
    return tuple(sorted(
        (item.merge_key, item.quantity) for item in items
    ))


def _norm(value: Optional[str]) -> str:
    return (value or "").strip().casefold()


def matches_unavailable(item: LineItem, resource_id: Optional[str], name: Optional[str], variation_label: str) -> bool:
    """Does an unavailable report refer to this line?"""
    if variation_label and _norm(variation_label) != _norm(item.variation_label):
        return False
    if resource_id:
        return resource_id == item.resource_id
    if name:
        return _norm(name) == _norm(item.name)
    return False


def flag_unavailable(items: Sequence[LineItem], unavailable: Iterable) -> List[LineItem]:
    """
    Mark the lines an unavailable report refers to and clear all other flags

    `unavailable` is an iterable of objects exposing resource_id, name and
    variation_label (see booking.availability.models.UnavailableLine).
    """
    reports = list(unavailable)
    flagged: List[LineItem] = []
    for item in items:
        hit = any(
            matches_unavailable(item, u.resource_id, u.name, u.variation_label)
            for u in reports
        )
        flagged.append(item if item.flagged_unavailable == hit
                       else item.model_copy(update={"flagged_unavailable": hit}))
    return flagged
