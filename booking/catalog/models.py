"""
Catalog Data Models
"""

from decimal import Decimal
from typing import List

from pydantic import AliasChoices, BaseModel, Field

from booking.line_items.models import LineItem, LineItemKind, VariationKey


class CatalogEntry(BaseModel):
    """Display name and price of an inventory item or package"""
    resource_id: str = Field(..., validation_alias=AliasChoices("resource_id", "id", "_id"))
    kind: LineItemKind = LineItemKind.ITEM
    name: str = Field(default="", validation_alias=AliasChoices("name", "itemName", "packageName"))
    unit_price: Decimal = Field(
        default=Decimal("0"), ge=0, validation_alias=AliasChoices("unit_price", "price"),
    )
    variations: List[VariationKey] = Field(default_factory=list)

    def offers(self, variation: VariationKey) -> bool:
        """Entries without a variation list accept any variation"""
        return not self.variations or variation in self.variations

    def line_for(self, variation: VariationKey, quantity: int = 1) -> LineItem:
        if not self.offers(variation):
            raise ValueError(f"{self.name or self.resource_id} has no variation '{variation.label}'")
        return LineItem(
            kind=self.kind,
            resource_id=self.resource_id,
            name=self.name,
            variation=variation,
            quantity=quantity,
            unit_price=self.unit_price,
        )
