"""
Visibility-bound polling

A cancelable periodic task that runs only while its page is visible. Each
start bumps a generation; results from an older generation are dropped, the
same discipline the availability verifier uses.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Generic, Optional, Set, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class VisibilityBoundPoller(Generic[T]):
    """
    Poll `fetch` every `interval` seconds while enabled and visible

    Usage:
        poller = VisibilityBoundPoller(client.latest_reading, interval=2.0,
                                       on_result=show_reading)
        poller.start()
        poller.set_visible(False)   # pauses
        poller.set_visible(True)    # fetches immediately, then resumes
        await poller.stop()
    """

    def __init__(
        self,
        fetch: Callable[[], Awaitable[T]],
        interval: float = 2.0,
        on_result: Optional[Callable[[T], Any]] = None,
        on_error: Optional[Callable[[Exception], Any]] = None,
    ):
        self._fetch = fetch
        self._interval = interval
        self._on_result = on_result
        self._on_error = on_error
        self._generation = 0
        self._enabled = False
        self._visible = True
        self._task: Optional[asyncio.Task] = None
        self._stale_tasks: Set[asyncio.Task] = set()

        self.latest: Optional[T] = None
        self.error: Optional[str] = None
        self.is_loading = True

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        self._enabled = True
        if self._visible:
            self._restart()

    def set_visible(self, visible: bool) -> None:
        if visible == self._visible:
            return
        self._visible = visible
        if not self._enabled:
            return
        if visible:
            self._restart()
        else:
            self._cancel_current()

    async def stop(self) -> None:
        self._enabled = False
        self._cancel_current()
        pending = [t for t in self._stale_tasks if not t.done()]
        if pending:
            await asyncio.wait(pending)

    def _restart(self) -> None:
        self._cancel_current()
        self._generation += 1
        self._task = asyncio.get_running_loop().create_task(self._run(self._generation))

    def _cancel_current(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._stale_tasks.add(self._task)
            self._task.add_done_callback(self._stale_tasks.discard)
            self._task = None

    async def _run(self, generation: int) -> None:
        while True:
            try:
                result = await self._fetch()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                if generation == self._generation:
                    self.error = str(e) or e.__class__.__name__
                    logger.warning(f"Polling failed: {self.error}")
                    if self._on_error is not None:
                        self._on_error(e)
            else:
                if generation != self._generation:
                    logger.debug(f"Dropping poll result from generation {generation}")
                    return
                self.latest = result
                self.error = None
                if self._on_result is not None:
                    self._on_result(result)
            finally:
                self.is_loading = False
            await asyncio.sleep(self._interval)
