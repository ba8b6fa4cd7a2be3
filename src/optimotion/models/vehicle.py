"""Vehicle model."""

from __future__ import annotations

from datetime import date
from enum import StrEnum

from pydantic import Field, field_validator

from optimotion.models._base import OptimotionBaseModel


class VehicleStatus(StrEnum):
    """Operational mode of a vehicle. Mutually exclusive."""

    ACTIVE = "active"
    MAINTENANCE = "maintenance"
    CHARGING = "charging"
    OFFLINE = "offline"


class Vehicle(OptimotionBaseModel):
    """A fleet vehicle."""

    id: str
    """Identifier, unique within the fleet and stable for the vehicle's lifetime."""
    status: VehicleStatus
    """Current operational mode."""
    battery_health: int = Field(ge=0, le=100)
    """Battery state of health as a whole percentage."""
    location: str = ""
    """Free-text current site (e.g. ``"Hyderabad Central"``)."""
    last_service: date | None = None
    """Date of the most recent maintenance."""

    @field_validator("id")
    @classmethod
    def _normalize_id(cls, value: str) -> str:
        vehicle_id = value.strip()
        if not vehicle_id:
            raise ValueError("id must be non-empty")
        return vehicle_id

    @property
    def is_active(self) -> bool:
        return self.status == VehicleStatus.ACTIVE

    def matches(self, needle: str) -> bool:
        """Case-insensitive substring match on ``id`` and ``location``.

        *needle* must already be casefolded.
        """
        return needle in self.id.casefold() or needle in self.location.casefold()
