"""
Root conftest.py - Global fixtures and configuration for all test layers.

Test Layers:
    - component/  : Component tests (mocked collaborators, virtual timers)
    - unit/       : Unit tests (pure functions, no I/O)
"""
import os
import sys
from decimal import Decimal

import pytest

# Set testing environment BEFORE any project imports
os.environ.setdefault("ENV", "testing")

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from core.config import AppConfig, FinancialConfig
from booking.calendar.models import ClosureCalendar, ClosureDay
from booking.drafts.validation import DraftValidator
from booking.financials.policy import StandardDepositPolicy
from booking.financials.recalculator import FinancialRecalculator
from tests.fixtures import TODAY


def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line("markers", "unit: pure logic tests, no I/O")
    config.addinivalue_line("markers", "component: components with mocked collaborators")


# =============================================================================
# Configuration
# =============================================================================

@pytest.fixture
def app_config() -> AppConfig:
    """Default configuration, independent of the process environment"""
    return AppConfig(environment="testing")


# =============================================================================
# Domain Fixtures
# =============================================================================

@pytest.fixture
def closure_calendar() -> ClosureCalendar:
    """Sundays closed plus one declared holiday"""
    return ClosureCalendar(
        [ClosureDay(day="2025-06-12", reason="Independence Day")],
        closed_weekdays=frozenset({6}),
    )


@pytest.fixture
def validator(closure_calendar: ClosureCalendar) -> DraftValidator:
    return DraftValidator(closure_calendar, today=lambda: TODAY)


@pytest.fixture
def recalculator() -> FinancialRecalculator:
    """Shop defaults: item deposit capped at 500, packages 2000"""
    return FinancialRecalculator(StandardDepositPolicy.from_config(FinancialConfig()))


@pytest.fixture
def example_recalculator() -> FinancialRecalculator:
    """20% item deposit, 150 flat package deposit, no cap"""
    policy = StandardDepositPolicy(
        item_rate=Decimal("0.2"), item_cap=None, package_flat=Decimal("150"),
    )
    return FinancialRecalculator(policy)
