"""Fantasy team and league models."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from fantaf1.models.rules import RuleSet


class Team(BaseModel):
    """A user's roster inside one league.

    ``driver_ids`` keeps acquisition order; the roster sanitizer relies on it
    when it picks automatic captain and reserve assignments.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    user_id: str
    league_id: str
    name: str = "My F1 Team"
    budget: Decimal = Decimal("100")
    driver_ids: tuple[str, ...] = ()
    captain_id: str | None = None
    reserve_id: str | None = None
    total_points: float = 0.0
    version: int = 0

    def owns(self, driver_id: str | None) -> bool:
        return driver_id is not None and driver_id in self.driver_ids


class League(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    rules: RuleSet = Field(default_factory=RuleSet)
