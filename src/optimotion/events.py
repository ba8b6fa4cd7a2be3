"""State change notifications published to presentation listeners."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChangeKind(StrEnum):
    TICK = "tick"
    CONNECTIVITY = "connectivity"
    INSTALL_OFFER = "install_offer"
    TAB = "tab"
    SEARCH = "search"


class StateChange(BaseModel):
    """One applied mutation. Listeners re-read the view on receipt."""

    model_config = ConfigDict(frozen=True)

    kind: ChangeKind
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("observed_at")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value
