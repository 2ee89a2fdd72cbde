"""Team score aggregation: role multipliers on top of driver points."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from fantaf1.models.classification import Classification
from fantaf1.models.race import RaceResults
from fantaf1.models.rules import RuleSet
from fantaf1.models.team import Team
from fantaf1.models.team_result import DriverRole, TeamResult, TeamResultDriver
from fantaf1.points import round_points


@dataclass(frozen=True)
class TeamScore:
    """Team total plus the per-driver values to store.

    Stored driver values are rounded one by one, so their sum can differ
    from ``total`` by up to 0.1 per driver.
    """

    total: float
    drivers: tuple[TeamResultDriver, ...]


def starter_dnf(team: Team, classification: Classification) -> bool:
    """True when a non-reserve driver of the team has no classification entry."""
    return any(
        driver_id not in classification
        for driver_id in team.driver_ids
        if driver_id != team.reserve_id
    )


def score_team(
    team: Team,
    driver_points: Mapping[str, float],
    classification: Classification,
    captain_multiplier: float = 1.5,
) -> TeamScore:
    """Apply exactly one role to each owned driver and sum the team.

    The reserve is insurance: it scores its full value only when a starter
    did not finish, otherwise it is benched at zero. The reserve check wins
    over the captain check.
    """
    insured = starter_dnf(team, classification)

    raw_total = 0.0
    stored: list[TeamResultDriver] = []
    for driver_id in team.driver_ids:
        base = driver_points.get(driver_id, 0.0)
        if driver_id == team.reserve_id:
            role = DriverRole.RESERVE if insured else DriverRole.BENCHED
            value = base if insured else 0.0
        elif driver_id == team.captain_id:
            role = DriverRole.CAPTAIN
            value = base * captain_multiplier
        else:
            role = DriverRole.STARTER
            value = base
        raw_total += value
        stored.append(TeamResultDriver(driver_id=driver_id, points=round_points(value), role=role))

    return TeamScore(total=round_points(raw_total), drivers=tuple(stored))


def build_team_result(
    team: Team,
    race_id: str,
    results: RaceResults,
    rules: RuleSet,
) -> TeamResult:
    """Snapshot a team from a stored results payload, without rescoring drivers."""
    score = score_team(team, results.driver_points, results.race, rules.captain_multiplier)
    return TeamResult(
        team_id=team.id,
        race_id=race_id,
        league_id=team.league_id,
        points=score.total,
        captain_id=team.captain_id,
        reserve_id=team.reserve_id,
        drivers=score.drivers,
    )
