"""Recurring timer on an asyncio event loop."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from optimotion.environment.base import TimerHandle

_logger = logging.getLogger(__name__)


class AsyncioScheduler:
    """Recurring timers backed by ``loop.call_at``.

    Each firing re-arms the timer at ``previous deadline + interval`` so
    slow callbacks do not accumulate drift. Callbacks run on the loop
    thread, one at a time, so a tick always completes before the next one
    can start.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop
        self._timers: dict[TimerHandle, asyncio.TimerHandle] = {}

    @property
    def active_count(self) -> int:
        return len(self._timers)

    def _require_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            # Raises RuntimeError outside a running loop.
            self._loop = asyncio.get_running_loop()
        return self._loop

    def schedule_recurring(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        if interval <= 0:
            raise ValueError("interval must be positive")
        loop = self._require_loop()
        handle = TimerHandle(interval=interval, callback=callback)
        self._arm(loop, handle, loop.time() + interval)
        _logger.debug("Recurring timer %s scheduled every %.3fs", handle.id, interval)
        return handle

    def cancel(self, handle: TimerHandle) -> None:
        timer = self._timers.pop(handle, None)
        if timer is None:
            return
        timer.cancel()
        _logger.debug("Recurring timer %s cancelled", handle.id)

    def cancel_all(self) -> None:
        for handle in list(self._timers):
            self.cancel(handle)

    def _arm(self, loop: asyncio.AbstractEventLoop, handle: TimerHandle, when: float) -> None:
        self._timers[handle] = loop.call_at(when, self._fire, loop, handle, when)

    def _fire(self, loop: asyncio.AbstractEventLoop, handle: TimerHandle, when: float) -> None:
        if handle not in self._timers:
            return
        try:
            handle.callback()
        finally:
            # The callback may have cancelled its own timer.
            if handle in self._timers:
                next_when = when + handle.interval
                # Skip missed deadlines after a long stall instead of bursting.
                now = loop.time()
                if next_when <= now:
                    missed = int((now - next_when) // handle.interval) + 1
                    next_when += missed * handle.interval
                self._arm(loop, handle, next_when)
