"""Per-driver point breakdown."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from fantaf1.models.classification import SessionKind


class BreakdownComponents(BaseModel):
    """Raw named components, before the constructor multiplier."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    position: float = 0
    overtakes: float = 0
    teammate: float = 0
    dnf: float = 0
    last_place: float = 0
    penalty: float = 0
    fastest_lap: float = 0
    pole: float = 0
    quali_session: float = 0
    grid_penalty: float = 0

    @property
    def race_subtotal(self) -> float:
        return (
            self.position + self.overtakes + self.teammate + self.dnf
            + self.last_place + self.penalty + self.fastest_lap
        )

    @property
    def quali_subtotal(self) -> float:
        return self.pole + self.quali_session + self.grid_penalty


class Breakdown(BaseModel):
    """Published scores for one driver in one session.

    ``race``, ``quali`` and ``total`` already include the constructor
    multiplier and are rounded to one decimal.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    driver_id: str
    session: SessionKind = SessionKind.RACE
    finished: bool
    race: float
    quali: float
    total: float
    multiplier: float = 1.0
    components: BreakdownComponents = BreakdownComponents()
