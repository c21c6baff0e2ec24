#!/usr/bin/env python3
"""
Core Module for the Booking Pipeline

Shared infrastructure used by every booking component.

COMPONENTS:
    - config/: Environment-driven configuration (AppConfig and sub-configs)
    - service_client_base.py: httpx base client for booking backends
    - scheduler.py: schedule(fn, delay) -> CancelToken abstraction
    - notifications.py: Session-scoped notification sink
    - polling.py: Visibility-bound periodic polling

USAGE:
    from core.config import get_settings
    from core.scheduler import AsyncioScheduler

    settings = get_settings()
    scheduler = AsyncioScheduler()
"""

from .scheduler import AsyncioScheduler, CancelToken, Scheduler
from .notifications import Notification, NotificationCenter, NotificationKind, NotificationSink
from .polling import VisibilityBoundPoller

__all__ = [
    "AsyncioScheduler",
    "CancelToken",
    "Scheduler",
    "Notification",
    "NotificationCenter",
    "NotificationKind",
    "NotificationSink",
    "VisibilityBoundPoller",
]

__version__ = "1.0.0"
