"""
Shared Test Fixtures

Centralized factories used across all test layers.

Structure:
    - booking_fixtures.py: Line items, windows, drafts, booked entities
"""

from .booking_fixtures import (
    TODAY,
    OPEN_DAY,
    OTHER_OPEN_DAY,
    SUNDAY,
    make_line,
    make_package_line,
    make_custom_line,
    make_unavailable,
    make_customer,
    make_window,
    make_draft,
    make_entity,
)

__all__ = [
    "TODAY",
    "OPEN_DAY",
    "OTHER_OPEN_DAY",
    "SUNDAY",
    "make_line",
    "make_package_line",
    "make_custom_line",
    "make_unavailable",
    "make_customer",
    "make_window",
    "make_draft",
    "make_entity",
]
