"""League scoring rule set."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fantaf1.constants import DEFAULT_RACE_POINTS, DEFAULT_SPRINT_POINTS


class RuleSet(BaseModel):
    """Fully populated per-league scoring configuration.

    Every field carries its default, so a league that stores only a partial
    rules document still yields a complete rule set and the scoring code
    never has to fall back on its own.
    """

    model_config = ConfigDict(frozen=True)

    race_position_points: tuple[float, ...] = DEFAULT_RACE_POINTS
    sprint_position_points: tuple[float, ...] = DEFAULT_SPRINT_POINTS

    race_last_place_malus: float = -3
    race_dnf: float = -5
    race_penalty: float = -5
    race_fastest_lap: float = 0

    quali_pole: float = 3
    quali_q3_reached: float = 3
    quali_q2_reached: float = 1
    quali_q1_eliminated: float = -3
    quali_grid_penalty: float = -3
    sprint_pole: float = 1

    teammate_beat: float = 2
    teammate_lost: float = -2
    teammate_beat_dnf: float = 1

    position_gained_top10: float = 1
    position_gained_outside: float = 0.5
    position_lost_top10: float = -1
    position_lost_outside: float = -0.5

    captain_multiplier: float = Field(default=1.5, gt=0)
    constructor_multipliers: dict[str, float] = Field(default_factory=dict)

    @field_validator("race_position_points", "sprint_position_points")
    @classmethod
    def _non_empty(cls, value: tuple[float, ...]) -> tuple[float, ...]:
        if not value:
            raise ValueError("point table must not be empty")
        return value

    @field_validator("constructor_multipliers")
    @classmethod
    def _positive_multipliers(cls, value: dict[str, float]) -> dict[str, float]:
        for constructor_id, multiplier in value.items():
            if multiplier <= 0:
                raise ValueError(f"multiplier for {constructor_id!r} must be positive")
        return value

    def multiplier_for(self, constructor_id: str | None) -> float:
        """Return the constructor multiplier, 1.0 when unset."""
        if constructor_id is None:
            return 1.0
        return self.constructor_multipliers.get(constructor_id, 1.0)
