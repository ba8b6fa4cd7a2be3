"""Mutable application state owned by the dashboard root."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from optimotion.models.analytics import AnalyticsSample
from optimotion.models.vehicle import Vehicle


class Tab(StrEnum):
    """The closed set of navigation tabs."""

    OVERVIEW = "overview"
    VEHICLES = "vehicles"
    ANALYTICS = "analytics"
    PAYMENTS = "payments"


class ApplicationState(BaseModel):
    """Process-wide dashboard state.

    Only the dashboard root and the components it wires up write to this
    object. Lists are replaced wholesale on every mutation, so a snapshot
    holding the previous list is never affected by a later update.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    active_tab: Tab = Tab.OVERVIEW
    vehicles: list[Vehicle] = Field(default_factory=list)
    analytics: list[AnalyticsSample] = Field(default_factory=list)
    connectivity: bool = True
    install_offer: Any | None = None
    """Pending install offer capability, if one has been received."""
    search_query: str = ""

    @field_validator("vehicles")
    @classmethod
    def _unique_vehicle_ids(cls, value: list[Vehicle]) -> list[Vehicle]:
        seen: set[str] = set()
        for vehicle in value:
            if vehicle.id in seen:
                raise ValueError(f"duplicate vehicle id {vehicle.id!r}")
            seen.add(vehicle.id)
        return value

    @field_validator("analytics")
    @classmethod
    def _chronological_samples(cls, value: list[AnalyticsSample]) -> list[AnalyticsSample]:
        for previous, current in zip(value, value[1:], strict=False):
            if current.date <= previous.date:
                raise ValueError(f"analytics must be strictly ascending by date ({previous.date} -> {current.date})")
        return value
