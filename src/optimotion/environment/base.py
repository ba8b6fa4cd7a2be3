"""Environment interfaces consumed by the dashboard core.

The host environment (reachability, install offers, a recurring timer) is
always injected. These protocols describe what the core needs; concrete
adapters live next to this module.
"""

from __future__ import annotations

import itertools
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Generic, Protocol, TypeVar

T = TypeVar("T")

_handle_ids = itertools.count(1)


class ReachabilitySignal(StrEnum):
    ONLINE = "online"
    OFFLINE = "offline"


@dataclass(frozen=True, eq=False)
class SubscriptionHandle:
    """Token returned by ``subscribe``.

    Handles compare by identity, so two registrations of equal callbacks
    stay distinguishable and unsubscribing removes exactly one of them.
    """

    topic: str
    callback: Callable[..., Any]
    id: int = field(default_factory=lambda: next(_handle_ids))


@dataclass(frozen=True, eq=False)
class TimerHandle:
    """Token returned by ``Scheduler.schedule_recurring``."""

    interval: float
    callback: Callable[[], None]
    id: int = field(default_factory=lambda: next(_handle_ids))


class InstallOffer(Protocol):
    """Deferred install capability delivered by the host.

    ``accept`` and ``dismiss`` may return an awaitable (e.g. the host's
    user-choice future).
    """

    def prevent_default(self) -> None: ...

    def accept(self) -> Awaitable[Any] | None: ...

    def dismiss(self) -> Awaitable[Any] | None: ...


class ReachabilitySource(Protocol):
    def is_online(self) -> bool: ...

    def subscribe(self, signal: ReachabilitySignal, callback: Callable[[], None]) -> SubscriptionHandle: ...

    def unsubscribe(self, handle: SubscriptionHandle) -> None: ...


class InstallOfferSource(Protocol):
    def subscribe(self, callback: Callable[[InstallOffer], None]) -> SubscriptionHandle: ...

    def unsubscribe(self, handle: SubscriptionHandle) -> None: ...


class Scheduler(Protocol):
    def schedule_recurring(self, interval: float, callback: Callable[[], None]) -> TimerHandle: ...

    def cancel(self, handle: TimerHandle) -> None: ...


class Signal(Generic[T]):
    """In-process signal with handle-based subscriptions."""

    def __init__(self, topic: str) -> None:
        self._topic = topic
        self._handles: list[SubscriptionHandle] = []

    @property
    def topic(self) -> str:
        return self._topic

    def __len__(self) -> int:
        return len(self._handles)

    def subscribe(self, callback: Callable[[T], None] | Callable[[], None]) -> SubscriptionHandle:
        handle = SubscriptionHandle(topic=self._topic, callback=callback)
        self._handles.append(handle)
        return handle

    def unsubscribe(self, handle: SubscriptionHandle) -> bool:
        """Remove *handle*. Returns ``False`` if it was not registered."""
        for index, candidate in enumerate(self._handles):
            if candidate is handle:
                del self._handles[index]
                return True
        return False

    def callbacks(self) -> tuple[Callable[..., Any], ...]:
        """Snapshot of the registered callbacks, in registration order."""
        return tuple(handle.callback for handle in self._handles)

    def emit(self, *args: Any) -> None:
        # Iterate a snapshot: callbacks may unsubscribe while we dispatch.
        for callback in self.callbacks():
            callback(*args)
