"""Initial fleet and analytics data shown before any refresh."""

from __future__ import annotations

from typing import Any

from optimotion.models.analytics import AnalyticsSample
from optimotion.models.vehicle import Vehicle

_VEHICLES: tuple[dict[str, Any], ...] = (
    {
        "id": "V001",
        "status": "active",
        "batteryHealth": 92,
        "location": "Hyderabad Central",
        "lastService": "2024-03-15",
    },
    {
        "id": "V002",
        "status": "maintenance",
        "batteryHealth": 78,
        "location": "Hyderabad East",
        "lastService": "2024-03-10",
    },
)

_ANALYTICS: tuple[dict[str, Any], ...] = (
    {"date": "2024-01", "vehicles": 45, "revenue": 76500, "efficiency": 88},
    {"date": "2024-02", "vehicles": 62, "revenue": 105400, "efficiency": 92},
    {"date": "2024-03", "vehicles": 78, "revenue": 132600, "efficiency": 89},
    {"date": "2024-04", "vehicles": 85, "revenue": 144500, "efficiency": 91},
)


def initial_vehicles() -> list[Vehicle]:
    return [Vehicle.model_validate(raw) for raw in _VEHICLES]


def initial_analytics() -> list[AnalyticsSample]:
    return [AnalyticsSample.model_validate(raw) for raw in _ANALYTICS]
