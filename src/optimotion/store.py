"""Single writer for :class:`~optimotion.models.state.ApplicationState`.

Every component mutates state through this store, and each applied
mutation publishes exactly one :class:`~optimotion.events.StateChange`.
Mutations run synchronously on the event-loop thread, so they are applied
serially and never interleave.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from typing import Any

from optimotion.environment.base import Signal, SubscriptionHandle
from optimotion.events import ChangeKind, StateChange
from optimotion.models.analytics import AnalyticsSample
from optimotion.models.state import ApplicationState, Tab

_logger = logging.getLogger(__name__)

StateListener = Callable[[StateChange], None]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class StateStore:
    """In-memory owner of the dashboard state."""

    def __init__(
        self,
        state: ApplicationState,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._state = state
        self._clock = clock
        self._listeners: Signal[StateChange] = Signal("state")

    @property
    def state(self) -> ApplicationState:
        """The live state. Read-only by convention; write through the setters."""
        return self._state

    def snapshot(self) -> ApplicationState:
        """Detached copy. Lists are copied; records are frozen."""
        return self._state.model_copy(
            update={
                "vehicles": list(self._state.vehicles),
                "analytics": list(self._state.analytics),
            }
        )

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, listener: StateListener) -> SubscriptionHandle:
        return self._listeners.subscribe(listener)

    def remove_listener(self, handle: SubscriptionHandle) -> None:
        self._listeners.unsubscribe(handle)

    def _publish(self, kind: ChangeKind) -> None:
        change = StateChange(kind=kind, observed_at=self._clock())
        for listener in self._listeners.callbacks():
            try:
                listener(change)
            except Exception:
                _logger.warning("State change listener failed kind=%s", kind, exc_info=True)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def set_connectivity(self, online: bool) -> bool:
        """Returns ``True`` if the value changed."""
        if self._state.connectivity == online:
            return False
        self._state.connectivity = online
        self._publish(ChangeKind.CONNECTIVITY)
        return True

    def set_install_offer(self, offer: Any | None) -> None:
        if offer is None and self._state.install_offer is None:
            return
        self._state.install_offer = offer
        self._publish(ChangeKind.INSTALL_OFFER)

    def replace_analytics(self, samples: Sequence[AnalyticsSample]) -> None:
        self._state.analytics = list(samples)
        self._publish(ChangeKind.TICK)

    def set_active_tab(self, tab: Tab) -> None:
        if self._state.active_tab == tab:
            return
        self._state.active_tab = tab
        self._publish(ChangeKind.TAB)

    def set_search_query(self, query: str) -> None:
        if self._state.search_query == query:
            return
        self._state.search_query = query
        self._publish(ChangeKind.SEARCH)
