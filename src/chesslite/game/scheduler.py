"""Deferred callbacks: a virtual-time scheduler and a superseding timer."""

from __future__ import annotations

import heapq
import logging
from collections.abc import Callable

from chesslite.game.interfaces import IScheduler, ITimerHandle

_LOGGER = logging.getLogger(__name__)


class _ManualHandle(ITimerHandle):
    __slots__ = ("due_ms", "seq", "callback", "_active")

    def __init__(self, due_ms: int, seq: int, callback: Callable[[], None]) -> None:
        self.due_ms = due_ms
        self.seq = seq
        self.callback = callback
        self._active = True

    def __lt__(self, other: _ManualHandle) -> bool:
        return (self.due_ms, self.seq) < (other.due_ms, other.seq)

    def cancel(self) -> None:
        self._active = False

    @property
    def is_active(self) -> bool:
        return self._active

    def fire(self) -> None:
        if not self._active:
            return
        self._active = False
        self.callback()


class ManualScheduler(IScheduler):
    """Scheduler driven by an explicit virtual clock.

    Nothing runs until :meth:`advance` or :meth:`run_pending` is called, so
    headless callers and tests control exactly when deferred work happens.
    Callbacks due at the same time run in the order they were scheduled.
    """

    __slots__ = ("_now_ms", "_queue", "_seq")

    def __init__(self) -> None:
        self._now_ms = 0
        self._queue: list[_ManualHandle] = []
        self._seq = 0

    @property
    def now_ms(self) -> int:
        return self._now_ms

    @property
    def pending(self) -> int:
        """Number of callbacks still waiting to run."""
        return sum(1 for h in self._queue if h.is_active)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ITimerHandle:
        handle = _ManualHandle(self._now_ms + max(0, delay_ms), self._seq, callback)
        self._seq += 1
        heapq.heappush(self._queue, handle)
        return handle

    def advance(self, delay_ms: int) -> None:
        """Move the clock forward, firing every callback that falls due."""
        target = self._now_ms + delay_ms
        while self._queue and self._queue[0].due_ms <= target:
            handle = heapq.heappop(self._queue)
            self._now_ms = max(self._now_ms, handle.due_ms)
            handle.fire()
        self._now_ms = target

    def run_pending(self) -> None:
        """Fire everything, including callbacks scheduled along the way."""
        while self._queue:
            handle = heapq.heappop(self._queue)
            self._now_ms = max(self._now_ms, handle.due_ms)
            handle.fire()


class OneShotTimer:
    """A named deferred callback where the last start wins.

    Starting the timer again cancels whatever is still pending.
    """

    __slots__ = ("_scheduler", "_name", "_handle")

    def __init__(self, scheduler: IScheduler, name: str = "timer") -> None:
        self._scheduler = scheduler
        self._name = name
        self._handle: ITimerHandle | None = None

    @property
    def is_active(self) -> bool:
        return self._handle is not None and self._handle.is_active

    def start(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self.cancel()
        _LOGGER.debug("Scheduling %s in %d ms", self._name, delay_ms)
        self._handle = self._scheduler.call_later(delay_ms, callback)

    def cancel(self) -> None:
        if self._handle is not None and self._handle.is_active:
            _LOGGER.debug("Cancelling pending %s", self._name)
            self._handle.cancel()
        self._handle = None
