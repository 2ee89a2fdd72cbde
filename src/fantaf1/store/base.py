"""Persistence contract used by the services."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from contextlib import AbstractContextManager
from dataclasses import dataclass, field

from fantaf1.call_logging import get_logger
from fantaf1.exceptions import Rejection, RejectionCode, StoreConflictError
from fantaf1.models.driver import Driver
from fantaf1.models.race import Race, RaceResults
from fantaf1.models.rules import RuleSet
from fantaf1.models.team import League, Team
from fantaf1.models.team_result import TeamResult

TEAM_UPDATE_ATTEMPTS = 3


@dataclass(frozen=True)
class RaceSyncCommit:
    """Everything one race sync writes, applied all at once."""

    race_id: str
    results: Mapping[str, RaceResults]  # by league id
    team_results: tuple[TeamResult, ...] = ()
    driver_points: Mapping[str, float] = field(default_factory=dict)


class LeagueStore(ABC):
    """Source-agnostic interface for game state."""

    @abstractmethod
    def get_race(self, race_id: str) -> Race | None: ...

    @abstractmethod
    def list_races(self) -> list[Race]: ...

    @abstractmethod
    def get_drivers(self) -> dict[str, Driver]: ...

    @abstractmethod
    def get_team(self, team_id: str) -> Team | None: ...

    @abstractmethod
    def list_teams(self, league_id: str | None = None) -> list[Team]: ...

    @abstractmethod
    def list_leagues(self) -> list[League]: ...

    @abstractmethod
    def list_team_results(
        self, *, race_id: str | None = None, league_id: str | None = None,
    ) -> list[TeamResult]: ...

    @abstractmethod
    def save_team(self, team: Team, *, expected_version: int) -> Team:
        """Persist ``team`` if the stored version still matches; return it with the new version."""

    @abstractmethod
    def team_lock(self, team_id: str) -> AbstractContextManager[None]:
        """Serialise read-validate-write cycles on one team."""

    @abstractmethod
    def commit_race_sync(self, commit: RaceSyncCommit) -> bool:
        """Apply a race sync atomically. Return False if the race was already completed."""

    def get_rules(self, league_id: str) -> RuleSet:
        for league in self.list_leagues():
            if league.id == league_id:
                return league.rules
        return RuleSet()


def update_team(
    store: LeagueStore,
    team_id: str,
    mutate: Callable[[Team], Team],
    attempts: int = TEAM_UPDATE_ATTEMPTS,
) -> Team:
    """Read a team, apply ``mutate`` and write it back under the team lock.

    A version conflict (e.g. a race sync bumped the running total in
    between) re-runs the whole cycle against fresh state.
    """
    for attempt in range(1, attempts + 1):
        with store.team_lock(team_id):
            team = store.get_team(team_id)
            if team is None:
                raise Rejection(RejectionCode.TEAM_NOT_FOUND, f"Team {team_id} not found")
            updated = mutate(team)
            try:
                return store.save_team(updated, expected_version=team.version)
            except StoreConflictError:
                if attempt == attempts:
                    raise
                get_logger().warning(
                    "Version conflict on team %s (attempt %d/%d), retrying",
                    team_id, attempt, attempts,
                )
    raise StoreConflictError(f"Team {team_id} could not be updated")
