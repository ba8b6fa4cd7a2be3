"""Data models for the optimotion dashboard."""

from optimotion.models.analytics import AnalyticsSample
from optimotion.models.state import ApplicationState, Tab
from optimotion.models.vehicle import Vehicle, VehicleStatus
from optimotion.models.view import DashboardView, FleetMetrics, MetricCard, NavItem

__all__ = [
    "AnalyticsSample",
    "ApplicationState",
    "DashboardView",
    "FleetMetrics",
    "MetricCard",
    "NavItem",
    "Tab",
    "Vehicle",
    "VehicleStatus",
]
