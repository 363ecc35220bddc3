"""Scheduler backed by single-shot QTimers on the Qt event loop."""

from __future__ import annotations

from collections.abc import Callable

from PyQt6.QtCore import QObject, QTimer

from chesslite.game.interfaces import IScheduler, ITimerHandle


class _QtHandle(ITimerHandle):
    __slots__ = ("_timer", "_callback", "_on_done", "_active")

    def __init__(
        self,
        timer: QTimer,
        callback: Callable[[], None],
        on_done: Callable[[_QtHandle], None],
    ) -> None:
        self._timer = timer
        self._callback = callback
        self._on_done = on_done
        self._active = True
        timer.timeout.connect(self._fire)

    def _fire(self) -> None:
        if not self._active:
            return
        self._finish()
        self._callback()

    def cancel(self) -> None:
        if not self._active:
            return
        self._timer.stop()
        self._finish()

    @property
    def is_active(self) -> bool:
        return self._active

    def _finish(self) -> None:
        self._active = False
        self._timer.deleteLater()
        self._on_done(self)


class QtScheduler(IScheduler):
    """Runs callbacks on the thread owning *parent* (normally the UI thread).

    Pending handles are kept alive here so callers may drop them.
    """

    __slots__ = ("_parent", "_live")

    def __init__(self, parent: QObject | None = None) -> None:
        self._parent = parent
        self._live: set[_QtHandle] = set()

    @property
    def pending(self) -> int:
        return len(self._live)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ITimerHandle:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        handle = _QtHandle(timer, callback, self._live.discard)
        self._live.add(handle)
        timer.start(max(0, delay_ms))
        return handle
