"""
Component Test Layer Configuration

Structure:
    tests/component/
    ├── booking/     Verifier, commit, sessions, HTTP clients
    ├── core/        Notifications and polling
    └── mocks/       Mock implementations

Usage:
    pytest tests/component -v
"""
import pytest
import pytest_asyncio

from core.notifications import NotificationCenter
from booking.commit.coordinator import CommitCoordinator
from booking.drafts.models import EntityKind
from booking.drafts.validation import DraftValidator
from booking.financials.recalculator import FinancialRecalculator
from booking.verification.verifier import DebouncedVerifier
from booking.wizard.gate import WizardStepGate
from booking.wizard.session import BookingSession

from tests.component.mocks import (
    ManualScheduler,
    MockAvailabilityClient,
    MockCatalogClient,
    MockCommitClient,
    ScriptedPrompt,
)


# =============================================================================
# Timer and Notification Mocks
# =============================================================================

@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def notifications(scheduler: ManualScheduler) -> NotificationCenter:
    return NotificationCenter(scheduler=scheduler, dismiss_seconds=5.0, clock=lambda: scheduler.now)


# =============================================================================
# Collaborator Mocks
# =============================================================================

@pytest.fixture
def availability() -> MockAvailabilityClient:
    """Immediate-answer availability mock"""
    return MockAvailabilityClient()


@pytest.fixture
def held_availability() -> MockAvailabilityClient:
    """Availability mock whose calls wait for the test to resolve them"""
    return MockAvailabilityClient(hold=True)


@pytest.fixture
def commit_client() -> MockCommitClient:
    return MockCommitClient()


@pytest.fixture
def catalog() -> MockCatalogClient:
    return MockCatalogClient()


@pytest.fixture
def prompt() -> ScriptedPrompt:
    return ScriptedPrompt()


# =============================================================================
# Wired Components
# =============================================================================

@pytest_asyncio.fixture
async def verifier(availability: MockAvailabilityClient, scheduler: ManualScheduler):
    verifier = DebouncedVerifier(availability, scheduler, debounce_seconds=0.5)
    yield verifier
    await verifier.aclose()


@pytest.fixture
def coordinator(commit_client: MockCommitClient, validator: DraftValidator) -> CommitCoordinator:
    return CommitCoordinator(commit_client, validator)


@pytest_asyncio.fixture
async def session_factory(
    availability: MockAvailabilityClient,
    scheduler: ManualScheduler,
    recalculator: FinancialRecalculator,
    coordinator: CommitCoordinator,
    validator: DraftValidator,
    prompt: ScriptedPrompt,
    notifications: NotificationCenter,
    catalog: MockCatalogClient,
):
    """Build BookingSessions sharing the mocks above"""
    sessions = []

    def _create(kind: EntityKind = EntityKind.RESERVATION, **kwargs) -> BookingSession:
        session = BookingSession(
            kind=kind,
            verifier=DebouncedVerifier(availability, scheduler, debounce_seconds=0.5),
            recalculator=recalculator,
            coordinator=coordinator,
            gate=WizardStepGate(validator),
            prompt=prompt,
            notifications=notifications,
            catalog=catalog,
            **kwargs,
        )
        sessions.append(session)
        return session

    yield _create
    for session in sessions:
        await session.aclose()
