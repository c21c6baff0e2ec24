"""
Scheduler abstraction

Delayed callbacks behind `schedule(fn, delay) -> CancelToken`, so debounce and
auto-dismiss logic does not depend on any particular runtime's timers.
"""

import asyncio
import logging
from typing import Callable, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class CancelToken:
    """Handle returned by a scheduler; cancelling twice is harmless"""

    def __init__(self, on_cancel: Optional[Callable[[], None]] = None):
        self._on_cancel = on_cancel
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        if self._on_cancel is not None:
            self._on_cancel()


@runtime_checkable
class Scheduler(Protocol):
    """Anything that can run a callback after a delay (seconds)"""

    def schedule(self, fn: Callable[[], None], delay: float) -> CancelToken:
        ...


class AsyncioScheduler:
    """Scheduler backed by the running asyncio event loop"""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def schedule(self, fn: Callable[[], None], delay: float) -> CancelToken:
        loop = self._loop or asyncio.get_running_loop()
        handle = loop.call_later(max(delay, 0.0), fn)
        return CancelToken(handle.cancel)
