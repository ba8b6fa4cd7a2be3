"""Base model shared by the dashboard records.

Records accept both snake_case field names and the camelCase keys used by
the dashboard's seed data (``batteryHealth``, ``lastService``).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class OptimotionBaseModel(BaseModel):
    """Frozen record with camelCase aliases."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )
