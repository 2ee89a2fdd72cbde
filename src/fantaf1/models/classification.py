"""Session classification inputs."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# driver id -> 1-based position; a missing key means the driver has no result.
Classification = dict[str, int]


class SessionKind(str, Enum):
    RACE = "race"
    SPRINT = "sprint"


class Incidents(BaseModel):
    """Per-session facts that are not positions."""

    model_config = ConfigDict(frozen=True)

    grid_penalties: frozenset[str] = frozenset()
    race_penalties: frozenset[str] = frozenset()
    fastest_lap: str | None = None


class WeekendClassification(BaseModel):
    """Everything the scoring engine needs from one race weekend."""

    model_config = ConfigDict(frozen=True)

    quali: Classification = Field(default_factory=dict)
    race: Classification = Field(default_factory=dict)
    sprint_quali: Classification | None = None
    sprint: Classification | None = None
    incidents: Incidents = Field(default_factory=Incidents)
    sprint_incidents: Incidents = Field(default_factory=Incidents)

    @property
    def has_sprint(self) -> bool:
        return bool(self.sprint)
