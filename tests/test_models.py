"""Tests for the dashboard record models and seed data."""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from optimotion.models.analytics import AnalyticsSample
from optimotion.models.state import ApplicationState, Tab
from optimotion.models.vehicle import Vehicle, VehicleStatus
from optimotion.seed import initial_analytics, initial_vehicles

# ------------------------------------------------------------------
# Vehicle
# ------------------------------------------------------------------


class TestVehicle:
    def test_camel_case_keys(self) -> None:
        vehicle = Vehicle.model_validate(
            {
                "id": "V010",
                "status": "charging",
                "batteryHealth": 64,
                "location": "Depot",
                "lastService": "2024-02-29",
            }
        )
        assert vehicle.battery_health == 64
        assert vehicle.status == VehicleStatus.CHARGING
        assert vehicle.last_service == date(2024, 2, 29)

    def test_snake_case_names(self) -> None:
        vehicle = Vehicle(id="V011", status=VehicleStatus.ACTIVE, battery_health=100)
        assert vehicle.is_active
        assert vehicle.location == ""
        assert vehicle.last_service is None

    def test_id_is_stripped_and_required(self) -> None:
        assert Vehicle(id="  V012 ", status="active", battery_health=50).id == "V012"
        with pytest.raises(ValidationError):
            Vehicle(id="   ", status="active", battery_health=50)

    @pytest.mark.parametrize("health", [-1, 101])
    def test_battery_health_is_a_percentage(self, health: int) -> None:
        with pytest.raises(ValidationError):
            Vehicle(id="V013", status="active", battery_health=health)

    def test_unknown_status_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Vehicle(id="V014", status="scrapped", battery_health=10)

    def test_frozen(self) -> None:
        vehicle = Vehicle(id="V015", status="active", battery_health=10)
        with pytest.raises(ValidationError):
            vehicle.battery_health = 20  # type: ignore[misc]


# ------------------------------------------------------------------
# AnalyticsSample
# ------------------------------------------------------------------


class TestAnalyticsSample:
    def test_parse(self) -> None:
        sample = AnalyticsSample.model_validate({"date": "2024-05", "vehicles": 90, "revenue": 150000, "efficiency": 93})
        assert sample.revenue == 150000
        assert sample.efficiency == 93.0

    @pytest.mark.parametrize("period", ["2024-13", "2024-1", "24-01", "2024-01-01"])
    def test_month_key_validated(self, period: str) -> None:
        with pytest.raises(ValidationError):
            AnalyticsSample(date=period, vehicles=1, revenue=0, efficiency=0)

    def test_negative_counts_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AnalyticsSample(date="2024-01", vehicles=-1, revenue=0, efficiency=0)
        with pytest.raises(ValidationError):
            AnalyticsSample(date="2024-01", vehicles=1, revenue=-5, efficiency=0)

    def test_efficiency_unbounded(self) -> None:
        assert AnalyticsSample(date="2024-01", vehicles=1, revenue=0, efficiency=140.5).efficiency == 140.5


# ------------------------------------------------------------------
# ApplicationState
# ------------------------------------------------------------------


class TestApplicationState:
    def test_defaults(self) -> None:
        state = ApplicationState()
        assert state.active_tab == Tab.OVERVIEW
        assert state.vehicles == []
        assert state.install_offer is None
        assert state.search_query == ""

    def test_duplicate_vehicle_ids_rejected(self) -> None:
        vehicle = Vehicle(id="V001", status="active", battery_health=90)
        with pytest.raises(ValidationError):
            ApplicationState(vehicles=[vehicle, vehicle])

    def test_analytics_must_be_chronological(self) -> None:
        later = AnalyticsSample(date="2024-02", vehicles=1, revenue=0, efficiency=0)
        earlier = AnalyticsSample(date="2024-01", vehicles=1, revenue=0, efficiency=0)
        with pytest.raises(ValidationError):
            ApplicationState(analytics=[later, earlier])
        with pytest.raises(ValidationError):
            ApplicationState(analytics=[earlier, earlier])

    def test_assignment_is_validated(self) -> None:
        state = ApplicationState()
        with pytest.raises(ValidationError):
            state.active_tab = "settings"  # type: ignore[assignment]
        assert state.active_tab == Tab.OVERVIEW


# ------------------------------------------------------------------
# Seed data
# ------------------------------------------------------------------


def test_seed_matches_initial_dashboard() -> None:
    vehicles = initial_vehicles()
    analytics = initial_analytics()

    assert [v.id for v in vehicles] == ["V001", "V002"]
    assert vehicles[0].location == "Hyderabad Central"
    assert vehicles[1].status == VehicleStatus.MAINTENANCE
    assert [s.date for s in analytics] == ["2024-01", "2024-02", "2024-03", "2024-04"]
    assert analytics[-1].revenue == 144500


def test_seed_returns_fresh_lists() -> None:
    first = initial_vehicles()
    first.clear()
    assert len(initial_vehicles()) == 2
