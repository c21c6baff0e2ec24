"""
Line Item Data Models

Canonical representation of one requested resource (inventory variation,
package or custom-tailoring slot) within a draft booking.
"""

import uuid
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class LineItemKind(str, Enum):
    """What a line item reserves"""
    ITEM = "item"
    PACKAGE = "package"
    CUSTOM = "custom"


class VariationKey(BaseModel):
    """Variation descriptor: color+size for items, motif for packages"""
    model_config = ConfigDict(frozen=True)

    color: Optional[str] = None
    size: Optional[str] = None
    motif: Optional[str] = None

    @property
    def label(self) -> str:
        """Human label, e.g. 'Ivory, M' or the package motif name"""
        parts = [p for p in (self.color, self.size) if p]
        if parts:
            return ", ".join(parts)
        return self.motif or ""

    def as_tuple(self) -> Tuple[str, str, str]:
        return (self.color or "", self.size or "", self.motif or "")


def new_line_id(kind: LineItemKind) -> str:
    prefix = "pkg" if kind == LineItemKind.PACKAGE else kind.value
    return f"{prefix}_{uuid.uuid4().hex[:8]}"


class LineItem(BaseModel):
    """One requested resource plus quantity"""
    model_config = ConfigDict(frozen=True)

    line_id: str = Field(default="", description="Draft-local identifier")
    kind: LineItemKind = LineItemKind.ITEM
    resource_id: str = Field(..., min_length=1)
    name: str = ""
    variation: VariationKey = Field(default_factory=VariationKey)
    quantity: int = Field(default=1, ge=1)
    unit_price: Decimal = Field(default=Decimal("0"), ge=0)
    # Custom tailoring the customer rents back; carries a full-price deposit
    rent_back: bool = False
    # Set when the authoritative commit reported this line as unavailable
    flagged_unavailable: bool = False

    @model_validator(mode="before")
    @classmethod
    def _assign_line_id(cls, data):
        if isinstance(data, dict) and not data.get("line_id"):
            kind = LineItemKind(data.get("kind") or LineItemKind.ITEM)
            data = {**data, "line_id": new_line_id(kind)}
        return data

    @property
    def variation_label(self) -> str:
        return self.variation.label

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    @property
    def merge_key(self) -> Tuple[str, str, Tuple[str, str, str]]:
        """Lines with the same key are the same selection"""
        return (self.kind.value, self.resource_id, self.variation.as_tuple())

    def describe(self) -> str:
        label = self.variation_label
        name = self.name or self.resource_id
        return f"{name} ({label}) x{self.quantity}" if label else f"{name} x{self.quantity}"
