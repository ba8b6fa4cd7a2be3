"""Navigation and fleet-list filtering, composed into a read-only view."""

from __future__ import annotations

from collections.abc import Sequence

from optimotion.config import DashboardConfig
from optimotion.connectivity import OFFLINE_NOTICE
from optimotion.exceptions import InvalidTabError
from optimotion.metrics import compute_metrics, metric_cards
from optimotion.models.state import Tab
from optimotion.models.vehicle import Vehicle
from optimotion.models.view import DashboardView, NavItem
from optimotion.store import StateStore

NAVIGATION: tuple[tuple[Tab, str], ...] = (
    (Tab.OVERVIEW, "Overview"),
    (Tab.VEHICLES, "Fleet"),
    (Tab.ANALYTICS, "Analytics"),
    (Tab.PAYMENTS, "Payments"),
)


def filter_vehicles(vehicles: Sequence[Vehicle], query: str) -> list[Vehicle]:
    """Vehicles whose id or location contains *query*, case-insensitively.

    The query is matched literally, whitespace included. Only an empty query
    returns every vehicle. Source order is preserved.
    """
    needle = query.casefold()
    if not needle:
        return list(vehicles)
    return [vehicle for vehicle in vehicles if vehicle.matches(needle)]


class ViewStateController:
    def __init__(self, store: StateStore, config: DashboardConfig | None = None) -> None:
        self._store = store
        self._config = config or DashboardConfig()

    def set_active_tab(self, tab: Tab | str) -> Tab:
        """Switch tabs.

        Raises
        ------
        InvalidTabError
            If *tab* is not one of the navigation tabs. State is unchanged.
        """
        try:
            resolved = Tab(tab)
        except (ValueError, TypeError):
            raise InvalidTabError(tab) from None
        self._store.set_active_tab(resolved)
        return resolved

    def set_search_query(self, query: str) -> None:
        self._store.set_search_query(query)

    def filter_vehicles(self, query: str) -> list[Vehicle]:
        return filter_vehicles(self._store.state.vehicles, query)

    def view(self) -> DashboardView:
        state = self._store.state
        metrics = compute_metrics(state.vehicles, state.analytics)
        return DashboardView(
            active_tab=state.active_tab,
            page_title=state.active_tab.value.capitalize(),
            navigation=tuple(
                NavItem(tab=tab, label=label, active=tab == state.active_tab) for tab, label in NAVIGATION
            ),
            visible_vehicles=tuple(filter_vehicles(state.vehicles, state.search_query)),
            metrics=metrics,
            metric_cards=metric_cards(
                metrics,
                self._config.metric_trends,
                currency_symbol=self._config.currency_symbol,
            ),
            analytics=tuple(state.analytics),
            connectivity=state.connectivity,
            offline_notice=None if state.connectivity else OFFLINE_NOTICE,
            install_available=state.install_offer is not None,
            search_query=state.search_query,
        )
