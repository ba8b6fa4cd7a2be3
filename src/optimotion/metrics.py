"""Derived fleet metrics.

Everything here is a pure function of the vehicle and analytics sequences:
no stored state, no randomness. The dashboard calls these on every render.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from optimotion.exceptions import EmptyFleetError, NoDataError
from optimotion.models.analytics import AnalyticsSample
from optimotion.models.vehicle import Vehicle
from optimotion.models.view import FleetMetrics, MetricCard

#: Placeholder rendered for a metric that cannot be computed.
UNAVAILABLE = "—"


def active_vehicle_count(vehicles: Sequence[Vehicle]) -> int:
    return sum(1 for vehicle in vehicles if vehicle.is_active)


def total_vehicle_count(vehicles: Sequence[Vehicle]) -> int:
    return len(vehicles)


def average_battery_health(vehicles: Sequence[Vehicle]) -> int:
    """Mean battery health, rounded to the nearest integer (halves round up).

    Raises
    ------
    EmptyFleetError
        If *vehicles* is empty.
    """
    if not vehicles:
        raise EmptyFleetError("Cannot average battery health of an empty fleet")
    mean = sum(vehicle.battery_health for vehicle in vehicles) / len(vehicles)
    return math.floor(mean + 0.5)


def latest_revenue(analytics: Sequence[AnalyticsSample]) -> float:
    """Revenue of the most recent sample.

    Raises
    ------
    NoDataError
        If *analytics* is empty.
    """
    if not analytics:
        raise NoDataError("No analytics samples available")
    return analytics[-1].revenue


def compute_metrics(vehicles: Sequence[Vehicle], analytics: Sequence[AnalyticsSample]) -> FleetMetrics:
    """Snapshot all metrics, mapping unavailable ones to ``None``."""
    try:
        battery: int | None = average_battery_health(vehicles)
    except EmptyFleetError:
        battery = None
    try:
        revenue: float | None = latest_revenue(analytics)
    except NoDataError:
        revenue = None
    return FleetMetrics(
        active_vehicles=active_vehicle_count(vehicles),
        total_vehicles=total_vehicle_count(vehicles),
        average_battery_health=battery,
        latest_revenue=revenue,
    )


def format_revenue(value: float, currency_symbol: str = "₹") -> str:
    return f"{currency_symbol}{value:,.0f}"


def metric_cards(
    metrics: FleetMetrics,
    trends: Sequence[float] = (2.5, -1.2, 4.8),
    *,
    currency_symbol: str = "₹",
) -> tuple[MetricCard, ...]:
    """Overview cards: active/total vehicles, battery health, monthly revenue."""
    fleet_trend, battery_trend, revenue_trend = trends
    battery = UNAVAILABLE if metrics.average_battery_health is None else f"{metrics.average_battery_health}%"
    revenue = (
        UNAVAILABLE if metrics.latest_revenue is None else format_revenue(metrics.latest_revenue, currency_symbol)
    )
    return (
        MetricCard(
            title="Active Vehicles",
            value=f"{metrics.active_vehicles}/{metrics.total_vehicles}",
            trend=fleet_trend,
        ),
        MetricCard(title="Average Battery Health", value=battery, trend=battery_trend),
        MetricCard(title="Monthly Revenue", value=revenue, trend=revenue_trend),
    )
