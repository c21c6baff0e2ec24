"""
Booking Fixtures

Factories for line items, windows, drafts and booked entities.
"""
from datetime import date
from decimal import Decimal
from typing import List, Optional

from booking.availability.models import CandidateWindow, UnavailableLine
from booking.drafts.models import Address, BookedEntity, BookingDraft, CustomerInfo, EntityKind
from booking.financials.models import PaymentMethod, PaymentSelection
from booking.line_items.models import LineItem, LineItemKind, VariationKey

# A Monday; the next Sunday is 2025-06-01
TODAY = date(2025, 5, 26)
OPEN_DAY = date(2025, 6, 2)
OTHER_OPEN_DAY = date(2025, 6, 4)
SUNDAY = date(2025, 6, 1)


def make_line(
    resource_id: str = "gown_001",
    name: str = "Ivory Ball Gown",
    color: Optional[str] = "Ivory",
    size: Optional[str] = "M",
    quantity: int = 1,
    unit_price: str = "500",
    **extra,
) -> LineItem:
    """Inventory item line"""
    return LineItem(
        kind=LineItemKind.ITEM,
        resource_id=resource_id,
        name=name,
        variation=VariationKey(color=color, size=size),
        quantity=quantity,
        unit_price=Decimal(unit_price),
        **extra,
    )


def make_package_line(
    resource_id: str = "pkg_001",
    name: str = "Debut Package",
    motif: str = "Rose Gold",
    quantity: int = 1,
    unit_price: str = "800",
    **extra,
) -> LineItem:
    return LineItem(
        kind=LineItemKind.PACKAGE,
        resource_id=resource_id,
        name=name,
        variation=VariationKey(motif=motif),
        quantity=quantity,
        unit_price=Decimal(unit_price),
        **extra,
    )


def make_custom_line(unit_price: str = "3000", rent_back: bool = True) -> LineItem:
    return LineItem(
        kind=LineItemKind.CUSTOM,
        resource_id="custom_slot",
        name="Custom Tailoring",
        unit_price=Decimal(unit_price),
        rent_back=rent_back,
    )


def make_unavailable(
    resource_id: Optional[str] = "gown_001",
    name: Optional[str] = "Ivory Ball Gown",
    variation_label: str = "Ivory, M",
    requested: Optional[int] = 2,
    available: Optional[int] = 1,
) -> UnavailableLine:
    return UnavailableLine(
        resource_id=resource_id,
        name=name,
        variation_label=variation_label,
        requested_qty=requested,
        available_qty=available,
    )


def make_customer(**overrides) -> CustomerInfo:
    data = {
        "name": "Maria Santos",
        "phone_number": "09171234567",
        "email": "maria@example.com",
        "address": Address(
            province="Metro Manila", city="Quezon City", barangay="Bagong Pag-asa", street="12 Mabini St",
        ),
    }
    data.update(overrides)
    return CustomerInfo(**data)


def make_window(kind: EntityKind = EntityKind.RESERVATION, day: date = OPEN_DAY) -> CandidateWindow:
    if kind.uses_range:
        return CandidateWindow.spanning(day, 4)
    return CandidateWindow.single(day)


def make_draft(
    kind: EntityKind = EntityKind.RESERVATION,
    items: Optional[List[LineItem]] = None,
    day: date = OPEN_DAY,
    payment: Optional[PaymentSelection] = None,
    **overrides,
) -> BookingDraft:
    """A draft that passes every structural check"""
    data = {
        "kind": kind,
        "customer": make_customer(),
        "window": make_window(kind, day),
        "line_items": items if items is not None else [make_line()],
        "notes": "Fitting before pickup",
        "payment": payment or PaymentSelection(
            amount=Decimal("500"), method=PaymentMethod.GCASH, reference_number="GC-1001",
        ),
    }
    data.update(overrides)
    return BookingDraft(**data)


def make_entity(
    kind: EntityKind = EntityKind.RESERVATION,
    entity_id: str = "res_001",
    status: str = "Pending",
    items: Optional[List[LineItem]] = None,
    day: date = OPEN_DAY,
) -> BookedEntity:
    return BookedEntity(
        entity_id=entity_id,
        kind=kind,
        status=status,
        window=make_window(kind, day),
        line_items=items if items is not None else [make_line()],
    )
