"""Read-only projections handed to the presentation layer."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from optimotion.models.analytics import AnalyticsSample
from optimotion.models.state import Tab
from optimotion.models.vehicle import Vehicle


class FleetMetrics(BaseModel):
    """Derived metrics for one render.

    ``None`` means the metric is unavailable (empty fleet or no analytics).
    """

    model_config = ConfigDict(frozen=True)

    active_vehicles: int
    total_vehicles: int
    average_battery_health: int | None
    latest_revenue: float | None


class MetricCard(BaseModel):
    """One overview card: title, formatted value and trend percentage."""

    model_config = ConfigDict(frozen=True)

    title: str
    value: str
    trend: float | None = None


class NavItem(BaseModel):
    """A sidebar navigation entry."""

    model_config = ConfigDict(frozen=True)

    tab: Tab
    label: str
    active: bool = False


class DashboardView(BaseModel):
    """Everything the renderer needs for one frame."""

    model_config = ConfigDict(frozen=True)

    active_tab: Tab
    page_title: str
    navigation: tuple[NavItem, ...]
    visible_vehicles: tuple[Vehicle, ...]
    metrics: FleetMetrics
    metric_cards: tuple[MetricCard, ...]
    analytics: tuple[AnalyticsSample, ...]
    connectivity: bool
    offline_notice: str | None
    install_available: bool
    search_query: str
