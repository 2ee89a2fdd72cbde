"""Race weekend and persisted results payload."""

from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from fantaf1.constants import UNSET_SESSION_MARKERS
from fantaf1.models.breakdown import Breakdown
from fantaf1.models.classification import Classification


class RaceResults(BaseModel):
    """Stored results of one race for one league.

    Serialised with camelCase keys (``driverPoints``, ``sprintQuali``...).
    Team totals can be rebuilt from this payload alone.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    quali: Classification = Field(default_factory=dict)
    race: Classification = Field(default_factory=dict)
    sprint_quali: Classification | None = None
    sprint: Classification | None = None
    driver_points: dict[str, float] = Field(default_factory=dict)
    driver_race_points: dict[str, float] = Field(default_factory=dict)
    driver_quali_points: dict[str, float] = Field(default_factory=dict)
    driver_breakdown: dict[str, Breakdown] = Field(default_factory=dict)
    sprint_breakdown: dict[str, Breakdown] | None = None

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Race(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    season: int = 2026
    round: int = 0
    city: str | None = None
    country: str | None = None
    date: dt.date | None = None
    is_sprint: bool = False
    qualifying_utc: dt.datetime | None = None
    sprint_qualifying_utc: dt.datetime | None = None
    is_completed: bool = False
    # league id -> payload
    results: dict[str, RaceResults] = Field(default_factory=dict)

    @field_validator("qualifying_utc", "sprint_qualifying_utc", mode="before")
    @classmethod
    def _parse_session_time(cls, value: Any) -> Any:
        if isinstance(value, str):
            text = value.strip()
            if text in UNSET_SESSION_MARKERS:
                return None
            try:
                return dt.datetime.fromisoformat(text)
            except ValueError:
                return None
        return value

    @field_validator("qualifying_utc", "sprint_qualifying_utc")
    @classmethod
    def _assume_utc(cls, value: dt.datetime | None) -> dt.datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=dt.timezone.utc)
        return value

    @property
    def lock_session_utc(self) -> dt.datetime | None:
        """Session whose start locks the lineup for this weekend."""
        return self.sprint_qualifying_utc if self.is_sprint else self.qualifying_utc

    @property
    def location(self) -> str:
        return self.city or self.country or ""
