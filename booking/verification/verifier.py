"""
Debounced Verifier

Turns a stream of draft mutations into at most one in-flight availability
check, applying only the result that belongs to the latest mutation.

Every mutation bumps `generation`, cancels the pending quiet-period timer and
the in-flight check task. A settlement is applied only when its generation is
still current; anything else is dropped without touching the result.
"""

import asyncio
import logging
from typing import Callable, List, Optional, Sequence, Set, Tuple

from core.scheduler import CancelToken, Scheduler
from booking.availability.models import CandidateWindow, UnavailableLine
from booking.availability.protocols import AvailabilityClientProtocol, AvailabilityServiceError
from booking.line_items.cart import cart_fingerprint
from booking.line_items.models import LineItem

from .models import VerificationResult, VerificationState

logger = logging.getLogger(__name__)

ResultListener = Callable[[VerificationResult], None]


class DebouncedVerifier:
    """Per-draft incremental availability checker"""

    def __init__(
        self,
        client: AvailabilityClientProtocol,
        scheduler: Scheduler,
        debounce_seconds: float = 0.5,
        exclude_entity_id: Optional[str] = None,
    ):
        """
        Args:
            client: Availability Service client
            scheduler: Timer source for the quiet period
            debounce_seconds: Quiet period after the last mutation
            exclude_entity_id: Booking being edited, ignored by the service
        """
        self.client = client
        self.scheduler = scheduler
        self.debounce_seconds = debounce_seconds
        self.exclude_entity_id = exclude_entity_id

        self._generation = 0
        self._result = VerificationResult()
        self._window: Optional[CandidateWindow] = None
        self._items: List[LineItem] = []
        self._baseline: Optional[Tuple[CandidateWindow, Tuple]] = None
        self._timer: Optional[CancelToken] = None
        self._task: Optional[asyncio.Task] = None
        self._tasks: Set[asyncio.Task] = set()
        self._listeners: List[ResultListener] = []

    # ====================
    # State
    # ====================

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def result(self) -> VerificationResult:
        return self._result

    @property
    def state(self) -> VerificationState:
        return self._result.state

    def add_listener(self, listener: ResultListener) -> None:
        self._listeners.append(listener)

    def _publish(self, result: VerificationResult) -> None:
        self._result = result
        for listener in list(self._listeners):
            listener(result)

    # ====================
    # Inputs
    # ====================

    def set_authoritative(self, window: Optional[CandidateWindow], items: Sequence[LineItem]) -> None:
        """Record the server-confirmed window and items; rechecking them is a no-op"""
        if window is None or not items:
            self._baseline = None
            return
        self._baseline = (window, cart_fingerprint(items))

    def _matches_baseline(self, window: CandidateWindow, items: Sequence[LineItem]) -> bool:
        return self._baseline is not None and self._baseline == (window, cart_fingerprint(items))

    def notify_changed(self, window: Optional[CandidateWindow], items: Sequence[LineItem]) -> None:
        """Register a mutation of the window or the item set"""
        self._invalidate()
        self._window = window
        self._items = list(items)
        generation = self._generation

        if window is None or not self._items:
            self._publish(VerificationResult(state=VerificationState.UNCHECKED, generation=generation))
            return

        if self._matches_baseline(window, self._items):
            logger.debug(f"Generation {generation}: unchanged from confirmed booking, skipping check")
            self._publish(VerificationResult(state=VerificationState.SATISFIABLE, generation=generation))
            return

        self._publish(VerificationResult(state=VerificationState.DEBOUNCING, generation=generation))
        self._timer = self.scheduler.schedule(
            lambda: self._start_check(generation), self.debounce_seconds
        )

    def retry(self) -> None:
        """Re-run the check now under a new generation"""
        self._invalidate()
        if self._window is None or not self._items:
            self._publish(VerificationResult(state=VerificationState.UNCHECKED, generation=self._generation))
            return
        self._start_check(self._generation)

    def apply_conflicts(self, unavailable: Sequence[UnavailableLine]) -> None:
        """Install an authoritative conflict (from a commit) as the current result"""
        self._invalidate()
        self._publish(VerificationResult(
            state=VerificationState.CONFLICTS,
            generation=self._generation,
            unavailable=list(unavailable),
        ))

    def reset(self) -> None:
        """Forget the current inputs and return to unchecked"""
        self._invalidate()
        self._window = None
        self._items = []
        self._publish(VerificationResult(state=VerificationState.UNCHECKED, generation=self._generation))

    # ====================
    # Check lifecycle
    # ====================

    def _invalidate(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def _start_check(self, generation: int) -> None:
        if generation != self._generation:
            return
        self._timer = None
        window, items = self._window, list(self._items)
        self._publish(VerificationResult(state=VerificationState.CHECKING, generation=generation))

        task = asyncio.get_running_loop().create_task(self._run_check(generation, window, items))
        self._task = task
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run_check(self, generation: int, window: CandidateWindow, items: List[LineItem]) -> None:
        logger.debug(f"Generation {generation}: checking {len(items)} lines for {window}")
        try:
            response = await self.client.check(window, items, self.exclude_entity_id)
        except asyncio.CancelledError:
            logger.debug(f"Generation {generation}: check cancelled")
            raise
        except AvailabilityServiceError as e:
            self._resolve(generation, VerificationResult(
                state=VerificationState.CHECK_FAILED, generation=generation, error_message=str(e),
            ))
            return
        except Exception as e:
            logger.exception(f"Generation {generation}: unexpected availability check error")
            self._resolve(generation, VerificationResult(
                state=VerificationState.CHECK_FAILED, generation=generation, error_message=str(e),
            ))
            return

        if response.is_satisfiable:
            result = VerificationResult(state=VerificationState.SATISFIABLE, generation=generation)
        else:
            result = VerificationResult(
                state=VerificationState.CONFLICTS,
                generation=generation,
                unavailable=list(response.unavailable),
            )
        self._resolve(generation, result)

    def _resolve(self, generation: int, result: VerificationResult) -> None:
        if generation != self._generation:
            logger.debug(f"Discarding stale result for generation {generation} (current {self._generation})")
            return
        self._task = None
        logger.info(f"Generation {generation}: {result.state.value}")
        self._publish(result)

    async def wait_until_settled(self) -> None:
        """Wait for every started check task, stale ones included"""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def aclose(self) -> None:
        self._invalidate()
        for task in list(self._tasks):
            task.cancel()
        await self.wait_until_settled()
