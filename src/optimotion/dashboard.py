"""Dashboard root: owns application state and the mount/unmount lifecycle."""

from __future__ import annotations

import contextlib
import logging
import random
from collections.abc import Sequence
from typing import Any

from optimotion.config import DashboardConfig
from optimotion.connectivity import ConnectivityMonitor
from optimotion.environment.base import (
    InstallOfferSource,
    ReachabilitySource,
    Scheduler,
    SubscriptionHandle,
)
from optimotion.exceptions import DashboardMountError, DashboardStateError
from optimotion.install import InstallTracker
from optimotion.models.analytics import AnalyticsSample
from optimotion.models.state import ApplicationState, Tab
from optimotion.models.vehicle import Vehicle
from optimotion.models.view import DashboardView
from optimotion.refresh import LiveRefreshEngine, RefreshPhase
from optimotion.seed import initial_analytics, initial_vehicles
from optimotion.store import StateListener, StateStore
from optimotion.view import ViewStateController

_logger = logging.getLogger(__name__)


class Dashboard:
    """Fleet dashboard core.

    The host environment is injected; nothing here reads global state.
    Every instance owns its own subscriptions and timer, so several
    dashboards can share one environment.

    Usage::

        async with Dashboard(
            reachability=ManualReachability(),
            install_host=ManualInstallHost(),
            scheduler=AsyncioScheduler(),
            on_state_change=lambda change: render(dashboard.view()),
        ) as dashboard:
            dashboard.set_active_tab("analytics")
    """

    def __init__(
        self,
        *,
        reachability: ReachabilitySource,
        install_host: InstallOfferSource,
        scheduler: Scheduler,
        config: DashboardConfig | None = None,
        vehicles: Sequence[Vehicle] | None = None,
        analytics: Sequence[AnalyticsSample] | None = None,
        rng: random.Random | None = None,
        on_state_change: StateListener | None = None,
    ) -> None:
        self._config = config or DashboardConfig()
        state = ApplicationState(
            vehicles=list(vehicles) if vehicles is not None else initial_vehicles(),
            analytics=list(analytics) if analytics is not None else initial_analytics(),
        )
        self._store = StateStore(state)
        if on_state_change is not None:
            self._store.add_listener(on_state_change)

        self._connectivity = ConnectivityMonitor(reachability, self._store)
        self._install = InstallTracker(install_host, self._store)
        self._refresh = LiveRefreshEngine(scheduler, self._store, config=self._config, rng=rng)
        self._view = ViewStateController(self._store, self._config)
        self._teardown: contextlib.ExitStack | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def mounted(self) -> bool:
        return self._teardown is not None

    def mount(self) -> None:
        """Wire connectivity, install offers and the refresh timer.

        Raises
        ------
        DashboardStateError
            If already mounted.
        DashboardMountError
            If any registration fails. Registrations made before the failure
            are released first.
        """
        if self._teardown is not None:
            raise DashboardStateError("Dashboard is already mounted")

        stack = contextlib.ExitStack()
        try:
            self._connectivity.start()
            stack.callback(self._connectivity.stop)
            self._install.start()
            stack.callback(self._install.stop)
            self._refresh.start()
            stack.callback(self._refresh.stop)
        except Exception as exc:
            stack.close()
            raise DashboardMountError(f"Dashboard mount failed: {exc}") from exc

        self._teardown = stack
        _logger.debug("Dashboard mounted")

    def unmount(self) -> None:
        """Cancel the refresh timer and drop every subscription. Idempotent."""
        stack = self._teardown
        self._teardown = None
        if stack is None:
            return
        stack.close()
        _logger.debug("Dashboard unmounted")

    async def __aenter__(self) -> Dashboard:
        self.mount()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.unmount()

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def config(self) -> DashboardConfig:
        return self._config

    @property
    def state(self) -> ApplicationState:
        """Detached snapshot of the current state."""
        return self._store.snapshot()

    @property
    def refresh_phase(self) -> RefreshPhase:
        return self._refresh.phase

    @property
    def refresh_ticks(self) -> int:
        return self._refresh.ticks

    @property
    def install_available(self) -> bool:
        return self._install.available

    def view(self) -> DashboardView:
        return self._view.view()

    def add_listener(self, listener: StateListener) -> SubscriptionHandle:
        return self._store.add_listener(listener)

    def remove_listener(self, handle: SubscriptionHandle) -> None:
        self._store.remove_listener(handle)

    # ------------------------------------------------------------------
    # Mutation entry points
    # ------------------------------------------------------------------

    def set_active_tab(self, tab: Tab | str) -> Tab:
        return self._view.set_active_tab(tab)

    def set_search_query(self, query: str) -> None:
        self._view.set_search_query(query)

    def filter_vehicles(self, query: str) -> list[Vehicle]:
        return self._view.filter_vehicles(query)

    async def accept_install(self) -> bool:
        return await self._install.accept_install()

    async def dismiss_install(self) -> bool:
        return await self._install.dismiss_install()
