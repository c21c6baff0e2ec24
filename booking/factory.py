"""
Booking Factory

Factory for creating booking and reschedule sessions with real dependencies.
This is the ONLY module that imports concrete client implementations.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from core.config import AppConfig, get_settings
from core.notifications import NotificationCenter, NotificationSink
from core.scheduler import AsyncioScheduler, Scheduler

from .availability.client import AvailabilityClient
from .calendar.client import CalendarClient
from .calendar.models import ClosureCalendar
from .calendar.protocols import CalendarClientProtocol, CalendarServiceError
from .catalog.client import CatalogClient
from .commit.client import BookingApiClient
from .commit.coordinator import CommitCoordinator
from .drafts.models import BookedEntity, EntityKind
from .drafts.validation import DraftValidator
from .financials.policy import StandardDepositPolicy
from .financials.recalculator import FinancialRecalculator
from .verification.verifier import DebouncedVerifier
from .wizard.gate import WizardStepGate
from .wizard.protocols import ConfirmationPrompt
from .wizard.reschedule import RescheduleSession
from .wizard.session import BookingSession

logger = logging.getLogger(__name__)


@dataclass
class BookingClients:
    """HTTP clients shared by the sessions of one process"""
    availability: AvailabilityClient
    booking_api: BookingApiClient
    calendar: CalendarClient
    catalog: CatalogClient

    async def close(self) -> None:
        for client in (self.availability, self.booking_api, self.calendar, self.catalog):
            await client.close()


def create_clients(settings: Optional[AppConfig] = None) -> BookingClients:
    settings = settings or get_settings()
    services = settings.services
    return BookingClients(
        availability=AvailabilityClient(config=services),
        booking_api=BookingApiClient(config=services),
        calendar=CalendarClient(config=services),
        catalog=CatalogClient(config=services),
    )


def create_recalculator(settings: Optional[AppConfig] = None) -> FinancialRecalculator:
    settings = settings or get_settings()
    return FinancialRecalculator(
        policy=StandardDepositPolicy.from_config(settings.financial),
        down_payment_ratio=settings.financial.down_payment_ratio,
    )


async def load_closure_calendar(
    client: CalendarClientProtocol,
    settings: Optional[AppConfig] = None,
) -> ClosureCalendar:
    """Closed weekdays plus shop-declared dates; weekdays only if the dates cannot be loaded"""
    settings = settings or get_settings()
    try:
        closures = await client.list_closures()
    except CalendarServiceError as e:
        logger.warning(f"⚠️ Could not load unavailable dates, using closed weekdays only: {e}")
        closures = []
    return ClosureCalendar(closures, closed_weekdays=settings.calendar.closed_weekdays)


async def create_booking_session(
    kind: EntityKind,
    prompt: ConfirmationPrompt,
    clients: Optional[BookingClients] = None,
    settings: Optional[AppConfig] = None,
    scheduler: Optional[Scheduler] = None,
    notifications: Optional[NotificationSink] = None,
    today: Callable[[], date] = date.today,
) -> BookingSession:
    """
    Create a BookingSession with all real dependencies

    Args:
        kind: Reservation, rental or appointment
        prompt: Confirmation dialog used before clearing the cart
        clients: Shared HTTP clients (creates new ones if not provided)
        settings: Configuration (global settings if not provided)
        scheduler: Timer source (asyncio loop if not provided)
        notifications: Notification sink (a new NotificationCenter if not provided)
        today: Clock for past-date validation

    Returns:
        Fully initialized BookingSession
    """
    settings = settings or get_settings()
    clients = clients or create_clients(settings)
    scheduler = scheduler or AsyncioScheduler()
    notifications = notifications or NotificationCenter(
        scheduler=scheduler, dismiss_seconds=settings.notifications.dismiss_seconds,
    )

    calendar = await load_closure_calendar(clients.calendar, settings)
    validator = DraftValidator(calendar, phone_pattern=settings.calendar.phone_pattern, today=today)

    session = BookingSession(
        kind=kind,
        verifier=DebouncedVerifier(
            clients.availability, scheduler, debounce_seconds=settings.verification.debounce_seconds,
        ),
        recalculator=create_recalculator(settings),
        coordinator=CommitCoordinator(clients.booking_api, validator),
        gate=WizardStepGate(validator),
        prompt=prompt,
        notifications=notifications,
        catalog=clients.catalog,
        rental_window_days=settings.calendar.rental_window_days,
    )
    logger.info(f"✅ Booking session ready for a new {kind.value}")
    return session


async def create_reschedule_session(
    entity: BookedEntity,
    clients: Optional[BookingClients] = None,
    settings: Optional[AppConfig] = None,
    scheduler: Optional[Scheduler] = None,
    notifications: Optional[NotificationSink] = None,
    today: Callable[[], date] = date.today,
) -> RescheduleSession:
    settings = settings or get_settings()
    clients = clients or create_clients(settings)
    scheduler = scheduler or AsyncioScheduler()
    notifications = notifications or NotificationCenter(
        scheduler=scheduler, dismiss_seconds=settings.notifications.dismiss_seconds,
    )

    calendar = await load_closure_calendar(clients.calendar, settings)
    validator = DraftValidator(calendar, phone_pattern=settings.calendar.phone_pattern, today=today)

    return RescheduleSession(
        entity=entity,
        verifier=DebouncedVerifier(
            clients.availability,
            scheduler,
            debounce_seconds=settings.verification.debounce_seconds,
            exclude_entity_id=entity.entity_id,
        ),
        coordinator=CommitCoordinator(clients.booking_api, validator),
        notifications=notifications,
        rental_window_days=settings.calendar.rental_window_days,
    )


__all__ = [
    "BookingClients",
    "create_clients",
    "create_recalculator",
    "load_closure_calendar",
    "create_booking_session",
    "create_reschedule_session",
]
