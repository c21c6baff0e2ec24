"""
Booking Availability Verification & Conflict Resolution

COMPONENTS:
    - line_items/: LineItem model and cart operations
    - availability/: Availability Service client and conflict normalization
    - verification/: Debounced, generation-guarded verifier
    - financials/: Deposit policy and financial recalculator
    - drafts/: Booking draft, booked entity and local validation
    - commit/: Booking API client and commit coordinator
    - wizard/: Step gate, booking session, reschedule session
    - calendar/: Closure calendar
    - catalog/: Name and price lookup
    - factory.py: Wiring with real HTTP clients

USAGE:
    from booking.factory import create_booking_session
    from booking.drafts import EntityKind

    session = await create_booking_session(EntityKind.RENTAL, prompt=dialog)
    await session.select_date(date(2025, 6, 2))
"""

__version__ = "1.0.0"
