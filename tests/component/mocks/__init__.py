"""
Component Test Mocks

Shared mock implementations for component testing.
These mocks replace real I/O dependencies (HTTP collaborators, timers, dialogs).
"""

from .scheduler_mock import ManualScheduler, run_pending_tasks
from .availability_mock import MockAvailabilityClient
from .commit_mock import MockCommitClient
from .collaborator_mock import MockCalendarClient, MockCatalogClient, ScriptedPrompt

__all__ = [
    'ManualScheduler',
    'run_pending_tasks',
    'MockAvailabilityClient',
    'MockCommitClient',
    'MockCalendarClient',
    'MockCatalogClient',
    'ScriptedPrompt',
]
