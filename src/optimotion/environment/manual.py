"""In-process environment sources driven explicitly by the host.

Use these when the embedding application already receives its own
connectivity/install/timer events and only needs to forward them, and in
tests where time and signals must be controlled step by step.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from optimotion.environment.base import (
    InstallOffer,
    ReachabilitySignal,
    Signal,
    SubscriptionHandle,
    TimerHandle,
)

_logger = logging.getLogger(__name__)


class ManualReachability:
    """Reachability source whose state is set with :meth:`set_online`."""

    def __init__(self, *, online: bool = True) -> None:
        self._online = online
        self._signals: dict[ReachabilitySignal, Signal[None]] = {
            signal: Signal(signal.value) for signal in ReachabilitySignal
        }

    def is_online(self) -> bool:
        return self._online

    def subscribe(self, signal: ReachabilitySignal, callback: Callable[[], None]) -> SubscriptionHandle:
        return self._signals[ReachabilitySignal(signal)].subscribe(callback)

    def unsubscribe(self, handle: SubscriptionHandle) -> None:
        self._signals[ReachabilitySignal(handle.topic)].unsubscribe(handle)

    def subscriber_count(self, signal: ReachabilitySignal | None = None) -> int:
        if signal is not None:
            return len(self._signals[ReachabilitySignal(signal)])
        return sum(len(sig) for sig in self._signals.values())

    def set_online(self, online: bool) -> None:
        """Update reachability, emitting a signal only on transitions."""
        if online == self._online:
            return
        self._online = online
        _logger.debug("Reachability changed online=%s", online)
        self._signals[ReachabilitySignal.ONLINE if online else ReachabilitySignal.OFFLINE].emit()


class InstallOutcome(StrEnum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DISMISSED = "dismissed"


@dataclass(eq=False)
class DeferredInstallPrompt:
    """Concrete :class:`~optimotion.environment.base.InstallOffer`.

    ``on_accept`` and ``on_dismiss`` are invoked on the matching outcome;
    an awaitable they return is handed back to the caller.
    """

    on_accept: Callable[[], Awaitable[Any] | None] | None = None
    on_dismiss: Callable[[], Awaitable[Any] | None] | None = None
    default_prevented: bool = False
    outcome: InstallOutcome = InstallOutcome.PENDING

    def prevent_default(self) -> None:
        self.default_prevented = True

    def accept(self) -> Awaitable[Any] | None:
        self.outcome = InstallOutcome.ACCEPTED
        if self.on_accept is None:
            return None
        result = self.on_accept()
        return result if inspect.isawaitable(result) else None

    def dismiss(self) -> Awaitable[Any] | None:
        self.outcome = InstallOutcome.DISMISSED
        if self.on_dismiss is None:
            return None
        result = self.on_dismiss()
        return result if inspect.isawaitable(result) else None


class ManualInstallHost:
    """Install-offer source; call :meth:`offer` to deliver an offer."""

    def __init__(self) -> None:
        self._signal: Signal[InstallOffer] = Signal("installoffer")

    def subscribe(self, callback: Callable[[InstallOffer], None]) -> SubscriptionHandle:
        return self._signal.subscribe(callback)

    def unsubscribe(self, handle: SubscriptionHandle) -> None:
        self._signal.unsubscribe(handle)

    @property
    def subscriber_count(self) -> int:
        return len(self._signal)

    def offer(self, prompt: InstallOffer | None = None) -> InstallOffer:
        offer = prompt if prompt is not None else DeferredInstallPrompt()
        self._signal.emit(offer)
        return offer


class ManualScheduler:
    """Scheduler driven by :meth:`advance` instead of wall-clock time.

    Timers fire in deadline order; a recurring timer that is due several
    times within one ``advance`` fires once per elapsed interval.
    """

    def __init__(self) -> None:
        self._now = 0.0
        self._deadlines: dict[TimerHandle, float] = {}

    @property
    def now(self) -> float:
        return self._now

    @property
    def active_count(self) -> int:
        return len(self._deadlines)

    def schedule_recurring(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        if interval <= 0:
            raise ValueError("interval must be positive")
        handle = TimerHandle(interval=interval, callback=callback)
        self._deadlines[handle] = self._now + interval
        return handle

    def cancel(self, handle: TimerHandle) -> None:
        self._deadlines.pop(handle, None)

    def advance(self, seconds: float) -> int:
        """Move time forward and fire due timers. Returns the number of firings."""
        target = self._now + seconds
        fired = 0
        while True:
            due = [(when, handle) for handle, when in self._deadlines.items() if when <= target]
            if not due:
                break
            when, handle = min(due, key=lambda item: (item[0], item[1].id))
            self._now = when
            self._deadlines[handle] = when + handle.interval
            handle.callback()
            fired += 1
        self._now = target
        return fired
