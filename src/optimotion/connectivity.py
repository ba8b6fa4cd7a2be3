"""Mirror host reachability into dashboard state."""

from __future__ import annotations

import logging

from optimotion.environment.base import ReachabilitySignal, ReachabilitySource, SubscriptionHandle
from optimotion.exceptions import DashboardStateError
from optimotion.store import StateStore

_logger = logging.getLogger(__name__)

#: Banner text shown while the dashboard is offline.
OFFLINE_NOTICE = "Working offline. Changes will sync when connection is restored."


class ConnectivityMonitor:
    """Keeps ``ApplicationState.connectivity`` in step with a reachability source.

    The handles returned by ``subscribe`` are kept and handed back verbatim
    on :meth:`stop`, so exactly the registrations made here are removed.
    """

    def __init__(self, source: ReachabilitySource, store: StateStore) -> None:
        self._source = source
        self._store = store
        self._handles: list[SubscriptionHandle] = []

    @property
    def is_subscribed(self) -> bool:
        return bool(self._handles)

    def start(self) -> None:
        if self._handles:
            raise DashboardStateError("Connectivity monitor already started")

        self._store.set_connectivity(bool(self._source.is_online()))

        handles: list[SubscriptionHandle] = []
        try:
            handles.append(self._source.subscribe(ReachabilitySignal.ONLINE, self._on_online))
            handles.append(self._source.subscribe(ReachabilitySignal.OFFLINE, self._on_offline))
        except BaseException:
            for handle in reversed(handles):
                self._source.unsubscribe(handle)
            raise
        self._handles = handles
        _logger.debug("Connectivity monitor started online=%s", self._store.state.connectivity)

    def stop(self) -> None:
        handles = self._handles
        self._handles = []
        for handle in reversed(handles):
            self._source.unsubscribe(handle)
        if handles:
            _logger.debug("Connectivity monitor stopped")

    def _on_online(self) -> None:
        if self._store.set_connectivity(True):
            _logger.debug("Connectivity restored")

    def _on_offline(self) -> None:
        if self._store.set_connectivity(False):
            _logger.debug("Connectivity lost")
