"""Analytics sample model."""

from __future__ import annotations

from pydantic import Field

from optimotion.models._base import OptimotionBaseModel


class AnalyticsSample(OptimotionBaseModel):
    """Fleet totals for one month.

    ``efficiency`` is deliberately unbounded here; the live refresh engine
    decides whether to clamp it.
    """

    date: str = Field(pattern=r"^\d{4}-(0[1-9]|1[0-2])$")
    """Period key, ``YYYY-MM``."""
    vehicles: int = Field(ge=0)
    """Number of fleet vehicles in the period."""
    revenue: float = Field(ge=0)
    """Revenue for the period. May go up or down between refreshes."""
    efficiency: float
    """Fleet efficiency percentage."""
