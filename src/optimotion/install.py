"""Capture and consume the host's offer to install the dashboard as an app."""

from __future__ import annotations

import inspect
import logging

from optimotion.environment.base import InstallOffer, InstallOfferSource, SubscriptionHandle
from optimotion.exceptions import DashboardStateError
from optimotion.store import StateStore

_logger = logging.getLogger(__name__)


class InstallTracker:
    """Holds at most one pending install offer.

    A newer offer replaces an older one; there is no queue. The offer is
    removed from state before its capability is invoked, so a re-entrant
    call can never consume it twice.
    """

    def __init__(self, source: InstallOfferSource, store: StateStore) -> None:
        self._source = source
        self._store = store
        self._handle: SubscriptionHandle | None = None

    @property
    def available(self) -> bool:
        return self._store.state.install_offer is not None

    def start(self) -> None:
        if self._handle is not None:
            raise DashboardStateError("Install tracker already started")
        self._handle = self._source.subscribe(self._on_offer)

    def stop(self) -> None:
        """Unsubscribe and forget any pending offer without answering it."""
        handle = self._handle
        self._handle = None
        if handle is not None:
            self._source.unsubscribe(handle)
        self._store.set_install_offer(None)

    def _on_offer(self, offer: InstallOffer) -> None:
        offer.prevent_default()
        if self.available:
            _logger.debug("Install offer replaced by a newer one")
        self._store.set_install_offer(offer)
        _logger.debug("Install offer received")

    async def accept_install(self) -> bool:
        """Accept the pending offer.

        Returns ``False`` (and does nothing) when no offer is pending.
        """
        offer = self._take()
        if offer is None:
            _logger.debug("accept_install called with no pending offer")
            return False
        result = offer.accept()
        if inspect.isawaitable(result):
            await result
        _logger.debug("Install offer accepted")
        return True

    async def dismiss_install(self) -> bool:
        """Dismiss the pending offer. Returns ``False`` if there was none."""
        offer = self._take()
        if offer is None:
            return False
        result = offer.dismiss()
        if inspect.isawaitable(result):
            await result
        _logger.debug("Install offer dismissed")
        return True

    def _take(self) -> InstallOffer | None:
        offer = self._store.state.install_offer
        if offer is None:
            return None
        self._store.set_install_offer(None)
        return offer
