"""
Notification sink

Session-scoped replacement for a process-wide alert list. Components receive a
sink and call `add(message, kind)`; the center keeps the visible list and
dismisses entries after a delay, with hover-style pause/resume.
"""

import logging
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Protocol, Union, runtime_checkable

from .scheduler import CancelToken, Scheduler

logger = logging.getLogger(__name__)


class NotificationKind(str, Enum):
    """Notification severity"""
    SUCCESS = "success"
    DANGER = "danger"
    WARNING = "warning"
    INFO = "info"


@runtime_checkable
class NotificationSink(Protocol):
    """Capability to surface a message to the user"""

    def add(self, message: Union[str, List[str]], kind: NotificationKind) -> str:
        ...


@dataclass
class Notification:
    """A visible notification"""
    notification_id: str
    message: Union[str, List[str]]
    kind: NotificationKind
    started_at: float
    remaining: float
    paused: bool = False


@dataclass
class NotificationCenter:
    """
    In-memory notification sink with timed dismissal

    Newest notifications come first. Each entry is removed after
    `dismiss_seconds` unless paused.
    """
    scheduler: Scheduler
    dismiss_seconds: float = 5.0
    clock: Callable[[], float] = time.monotonic
    _items: List[Notification] = field(default_factory=list, init=False)
    _timers: Dict[str, CancelToken] = field(default_factory=dict, init=False)

    @property
    def notifications(self) -> List[Notification]:
        return list(self._items)

    def add(
        self,
        message: Union[str, List[str]],
        kind: NotificationKind = NotificationKind.INFO,
        duration: Optional[float] = None,
    ) -> str:
        notification_id = uuid.uuid4().hex
        duration = self.dismiss_seconds if duration is None else duration
        self._items.insert(0, Notification(
            notification_id=notification_id,
            message=message,
            kind=NotificationKind(kind),
            started_at=self.clock(),
            remaining=duration,
        ))
        self._timers[notification_id] = self.scheduler.schedule(
            lambda: self.remove(notification_id), duration
        )
        log = logger.warning if kind in (NotificationKind.DANGER, NotificationKind.WARNING) else logger.info
        log(f"[{NotificationKind(kind).value}] {message}")
        return notification_id

    def remove(self, notification_id: str) -> None:
        self._items = [n for n in self._items if n.notification_id != notification_id]
        timer = self._timers.pop(notification_id, None)
        if timer is not None:
            timer.cancel()

    def pause(self, notification_id: str) -> None:
        """Stop the dismissal timer, keeping the remaining time"""
        for item in self._items:
            if item.notification_id == notification_id and not item.paused:
                timer = self._timers.pop(notification_id, None)
                if timer is not None:
                    timer.cancel()
                item.remaining = max(item.remaining - (self.clock() - item.started_at), 0.0)
                item.paused = True

    def resume(self, notification_id: str) -> None:
        """Restart the dismissal timer with whatever time was left"""
        for item in self._items:
            if item.notification_id == notification_id and item.paused:
                item.paused = False
                item.started_at = self.clock()
                self._timers[notification_id] = self.scheduler.schedule(
                    lambda: self.remove(notification_id), item.remaining
                )

    def clear(self) -> None:
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()
        self._items.clear()
