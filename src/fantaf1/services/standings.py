"""League standings and per-race leaderboards, read from stored snapshots."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass

from fantaf1.call_logging import log_service_call
from fantaf1.models.team import Team
from fantaf1.models.team_result import TeamResult
from fantaf1.points import round_points
from fantaf1.store.base import LeagueStore


@dataclass(frozen=True)
class StandingRow:
    rank: int
    team_id: str
    user_id: str
    team_name: str
    points: float
    races_scored: int


def league_standings(
    teams: Iterable[Team],
    team_results: Iterable[TeamResult],
) -> list[StandingRow]:
    """Sum each team's snapshots and rank them.

    Rank is the 1-based position after sorting by points (desc), then
    team name; tied teams get consecutive ranks.
    """
    totals: dict[str, float] = defaultdict(float)
    counts: dict[str, int] = defaultdict(int)
    for result in team_results:
        totals[result.team_id] += result.points
        counts[result.team_id] += 1

    ordered = sorted(
        teams,
        key=lambda t: (-round_points(totals[t.id]), t.name, t.id),
    )
    return [
        StandingRow(
            rank=index + 1,
            team_id=team.id,
            user_id=team.user_id,
            team_name=team.name,
            points=round_points(totals[team.id]),
            races_scored=counts[team.id],
        )
        for index, team in enumerate(ordered)
    ]


def race_leaderboard(
    team_results: Iterable[TeamResult],
    race_id: str,
    league_id: str | None = None,
) -> list[TeamResult]:
    """Snapshots of one race, best first."""
    rows = [
        r for r in team_results
        if r.race_id == race_id and (league_id is None or r.league_id == league_id)
    ]
    return sorted(rows, key=lambda r: (-r.points, r.team_id))


class StandingsService:
    """Standings read model over a store."""

    def __init__(self, store: LeagueStore) -> None:
        self._store = store

    @log_service_call
    def league(self, league_id: str) -> list[StandingRow]:
        return league_standings(
            self._store.list_teams(league_id),
            self._store.list_team_results(league_id=league_id),
        )

    @log_service_call
    def race(self, race_id: str, league_id: str | None = None) -> list[TeamResult]:
        return race_leaderboard(
            self._store.list_team_results(race_id=race_id, league_id=league_id),
            race_id,
            league_id,
        )
