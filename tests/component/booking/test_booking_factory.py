"""
Booking Factory Component Tests

Wiring with real HTTP clients behind httpx.MockTransport.

Usage:
    pytest tests/component/booking/test_booking_factory.py -v
"""
from datetime import date
from decimal import Decimal

import httpx
import pytest
import pytest_asyncio

from core.config import AppConfig, FinancialConfig
from booking.availability.client import AvailabilityClient
from booking.calendar.client import CalendarClient
from booking.calendar.protocols import CalendarServiceError
from booking.catalog.client import CatalogClient
from booking.commit.client import BookingApiClient
from booking.drafts.models import EntityKind
from booking.factory import (
    BookingClients,
    create_booking_session,
    create_recalculator,
    create_reschedule_session,
    load_closure_calendar,
)
from booking.wizard.models import WizardStep
from tests.component.mocks import MockCalendarClient, ScriptedPrompt
from tests.fixtures import TODAY, make_entity, make_line

pytestmark = [pytest.mark.component, pytest.mark.asyncio]

BASE_URL = "http://booking.test"


def routes(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/api/unavailability":
        return httpx.Response(200, json=[{"date": "2025-06-12", "reason": "Independence Day"}])
    if request.url.path == "/api/availability/check":
        return httpx.Response(200, json={"unavailable": []})
    return httpx.Response(404)


@pytest_asyncio.fixture
async def clients():
    transport = httpx.MockTransport(routes)
    clients = BookingClients(
        availability=AvailabilityClient(base_url=BASE_URL, transport=transport),
        booking_api=BookingApiClient(base_url=BASE_URL, transport=transport),
        calendar=CalendarClient(base_url=BASE_URL, transport=transport),
        catalog=CatalogClient(base_url=BASE_URL, transport=transport),
    )
    yield clients
    await clients.close()


async def test_booking_session_wiring(clients, app_config):
    session = await create_booking_session(
        EntityKind.RENTAL, ScriptedPrompt(), clients=clients, settings=app_config, today=lambda: TODAY,
    )

    assert session.step == WizardStep.REMINDERS
    assert session.gate.validator.calendar.reason_for(date(2025, 6, 12)) == "Independence Day"
    assert session.rental_window_days == 4
    assert session.verifier.debounce_seconds == 0.5
    await session.aclose()


async def test_reschedule_session_excludes_entity(clients, app_config):
    entity = make_entity(entity_id="res_3")
    session = await create_reschedule_session(entity, clients=clients, settings=app_config)
    assert session.verifier.exclude_entity_id == "res_3"
    await session.aclose()


async def test_calendar_failure_falls_back_to_weekdays(app_config):
    calendar = await load_closure_calendar(
        MockCalendarClient(error=CalendarServiceError("down")), app_config,
    )
    assert len(calendar) == 0
    assert calendar.is_closed(date(2025, 6, 1))


async def test_recalculator_uses_financial_config():
    settings = AppConfig(financial=FinancialConfig(item_deposit_rate=Decimal("0.2"), item_deposit_cap=None))
    snapshot = create_recalculator(settings).calculate([make_line(quantity=2, unit_price="500")])
    assert snapshot.required_deposit == Decimal("200.00")
