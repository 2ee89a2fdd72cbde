"""Immutable per-race team snapshot."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DriverRole(str, Enum):
    CAPTAIN = "captain"
    RESERVE = "reserve"
    BENCHED = "benched"
    STARTER = "starter"


class TeamResultDriver(BaseModel):
    model_config = ConfigDict(frozen=True)

    driver_id: str
    points: float
    role: DriverRole = DriverRole.STARTER


class TeamResult(BaseModel):
    """Snapshot written once per (team, race) by the race sync."""

    model_config = ConfigDict(frozen=True)

    team_id: str
    race_id: str
    league_id: str
    points: float
    captain_id: str | None = None
    reserve_id: str | None = None
    drivers: tuple[TeamResultDriver, ...] = ()
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
