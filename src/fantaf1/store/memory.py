"""In-memory store, used by tests and single-process deployments."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from fantaf1.exceptions import Rejection, RejectionCode, StoreConflictError
from fantaf1.models.driver import Driver
from fantaf1.models.race import Race
from fantaf1.models.team import League, Team
from fantaf1.models.team_result import TeamResult
from fantaf1.points import round_points

from .base import LeagueStore, RaceSyncCommit


class InMemoryLeagueStore(LeagueStore):
    """Dict-backed store.

    Writers swap whole dicts under one re-entrant lock, so a reader sees
    either the state before a race sync or the state after it.
    """

    def __init__(
        self,
        *,
        drivers: Iterable[Driver] = (),
        leagues: Iterable[League] = (),
        teams: Iterable[Team] = (),
        races: Iterable[Race] = (),
    ) -> None:
        self._lock = threading.RLock()
        self._team_locks: dict[str, threading.Lock] = {}
        self._drivers = {d.id: d for d in drivers}
        self._leagues = {lg.id: lg for lg in leagues}
        self._teams = {t.id: t for t in teams}
        self._races = {r.id: r for r in races}
        self._team_results: tuple[TeamResult, ...] = ()

    # ── Seeding ─────────────────────────────────────────────────

    def put_driver(self, driver: Driver) -> None:
        with self._lock:
            self._drivers = {**self._drivers, driver.id: driver}

    def put_race(self, race: Race) -> None:
        with self._lock:
            self._races = {**self._races, race.id: race}

    def put_league(self, league: League) -> None:
        with self._lock:
            self._leagues = {**self._leagues, league.id: league}

    def put_team(self, team: Team) -> None:
        with self._lock:
            self._teams = {**self._teams, team.id: team}

    # ── Reads ───────────────────────────────────────────────────

    def get_race(self, race_id: str) -> Race | None:
        with self._lock:
            return self._races.get(race_id)

    def list_races(self) -> list[Race]:
        with self._lock:
            return sorted(self._races.values(), key=lambda r: r.round)

    def get_drivers(self) -> dict[str, Driver]:
        with self._lock:
            return dict(self._drivers)

    def get_team(self, team_id: str) -> Team | None:
        with self._lock:
            return self._teams.get(team_id)

    def list_teams(self, league_id: str | None = None) -> list[Team]:
        with self._lock:
            return [
                t for t in self._teams.values()
                if league_id is None or t.league_id == league_id
            ]

    def list_leagues(self) -> list[League]:
        with self._lock:
            return list(self._leagues.values())

    def list_team_results(
        self, *, race_id: str | None = None, league_id: str | None = None,
    ) -> list[TeamResult]:
        with self._lock:
            return [
                r for r in self._team_results
                if (race_id is None or r.race_id == race_id)
                and (league_id is None or r.league_id == league_id)
            ]

    # ── Writes ──────────────────────────────────────────────────

    @contextmanager
    def team_lock(self, team_id: str) -> Iterator[None]:
        with self._lock:
            lock = self._team_locks.setdefault(team_id, threading.Lock())
        with lock:
            yield

    def save_team(self, team: Team, *, expected_version: int) -> Team:
        with self._lock:
            current = self._teams.get(team.id)
            if current is None:
                raise Rejection(RejectionCode.TEAM_NOT_FOUND, f"Team {team.id} not found")
            if current.version != expected_version:
                raise StoreConflictError(
                    f"Team {team.id} is at version {current.version}, expected {expected_version}",
                )
            saved = team.model_copy(update={"version": expected_version + 1})
            self._teams = {**self._teams, team.id: saved}
            return saved

    def commit_race_sync(self, commit: RaceSyncCommit) -> bool:
        with self._lock:
            race = self._races.get(commit.race_id)
            if race is None:
                raise Rejection(RejectionCode.RACE_NOT_FOUND, f"Race {commit.race_id} not found")
            if race.is_completed:
                return False

            teams = dict(self._teams)
            for result in commit.team_results:
                team = teams.get(result.team_id)
                if team is None:
                    raise Rejection(RejectionCode.TEAM_NOT_FOUND, f"Team {result.team_id} not found")
                teams[team.id] = team.model_copy(update={
                    "total_points": round_points(team.total_points + result.points),
                    "version": team.version + 1,
                })

            drivers = dict(self._drivers)
            for driver_id, points in commit.driver_points.items():
                driver = drivers.get(driver_id)
                if driver is not None:
                    drivers[driver_id] = driver.model_copy(
                        update={"points": round_points(driver.points + points)},
                    )

            races = {
                **self._races,
                race.id: race.model_copy(
                    update={"is_completed": True, "results": dict(commit.results)},
                ),
            }

            self._teams = teams
            self._drivers = drivers
            self._races = races
            self._team_results = self._team_results + tuple(commit.team_results)
            return True
