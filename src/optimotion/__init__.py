"""optimotion - Reactive state and live-update core for an EV fleet dashboard."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("optimotion")
except PackageNotFoundError:
    __version__ = "0+local"
from optimotion.config import DashboardConfig
from optimotion.dashboard import Dashboard
from optimotion.events import ChangeKind, StateChange
from optimotion.exceptions import (
    DashboardMountError,
    DashboardStateError,
    EmptyFleetError,
    InvalidTabError,
    MetricUnavailableError,
    NoDataError,
    OptimotionConfigError,
    OptimotionError,
)
from optimotion.metrics import (
    active_vehicle_count,
    average_battery_health,
    compute_metrics,
    latest_revenue,
    total_vehicle_count,
)
from optimotion.models import (
    AnalyticsSample,
    ApplicationState,
    DashboardView,
    FleetMetrics,
    MetricCard,
    NavItem,
    Tab,
    Vehicle,
    VehicleStatus,
)
from optimotion.refresh import RefreshPhase

__all__ = [
    "__version__",
    "AnalyticsSample",
    "ApplicationState",
    "ChangeKind",
    "Dashboard",
    "DashboardConfig",
    "DashboardMountError",
    "DashboardStateError",
    "DashboardView",
    "EmptyFleetError",
    "FleetMetrics",
    "InvalidTabError",
    "MetricCard",
    "MetricUnavailableError",
    "NavItem",
    "NoDataError",
    "OptimotionConfigError",
    "OptimotionError",
    "RefreshPhase",
    "StateChange",
    "Tab",
    "Vehicle",
    "VehicleStatus",
    "active_vehicle_count",
    "average_battery_health",
    "compute_metrics",
    "latest_revenue",
    "total_vehicle_count",
]
