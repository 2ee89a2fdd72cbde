"""Race sync: fetch a weekend, score every league, commit in one step."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from fantaf1.call_logging import get_logger, log_service_call
from fantaf1.exceptions import Rejection, RejectionCode
from fantaf1.models.classification import WeekendClassification
from fantaf1.models.driver import Driver
from fantaf1.models.race import Race, RaceResults
from fantaf1.models.rules import RuleSet
from fantaf1.models.team_result import TeamResult
from fantaf1.provider.base import ClassificationProvider
from fantaf1.services.aggregation import build_team_result
from fantaf1.services.scoring import build_race_results
from fantaf1.settings import Settings, get_settings
from fantaf1.store.base import LeagueStore, RaceSyncCommit


@dataclass(frozen=True)
class SyncReport:
    race_id: str
    already_synced: bool
    results: Mapping[str, RaceResults] = field(default_factory=dict)
    team_results: tuple[TeamResult, ...] = ()


def _referenced_ids(weekend: WeekendClassification) -> set[str]:
    ids = set(weekend.quali) | set(weekend.race)
    ids |= set(weekend.sprint_quali or {}) | set(weekend.sprint or {})
    return ids


class RaceSync:
    """Admin-triggered scoring of one race.

    The classification is fetched before anything is written. Everything
    the sync produces is handed to the store as a single commit, so a
    failure or timeout leaves no trace. A race that is already completed
    is never scored again.
    """

    def __init__(
        self,
        store: LeagueStore,
        provider: ClassificationProvider,
        *,
        default_timeout: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._store = store
        self._provider = provider
        self._default_timeout = default_timeout
        self._clock = clock
        self._guard = threading.Lock()
        self._race_locks: dict[str, threading.Lock] = {}

    @classmethod
    def from_settings(
        cls,
        store: LeagueStore,
        provider: ClassificationProvider,
        settings: Settings | None = None,
    ) -> RaceSync:
        settings = settings or get_settings()
        return cls(store, provider, default_timeout=settings.sync_timeout)

    def _race_lock(self, race_id: str) -> threading.Lock:
        with self._guard:
            return self._race_locks.setdefault(race_id, threading.Lock())

    def _completed_report(self, race: Race) -> SyncReport:
        return SyncReport(
            race_id=race.id,
            already_synced=True,
            results=dict(race.results),
            team_results=tuple(self._store.list_team_results(race_id=race.id)),
        )

    def _fetch(self, race: Race) -> WeekendClassification:
        try:
            weekend = self._provider.fetch_weekend(race)
        except Exception as exc:
            raise Rejection(
                RejectionCode.NO_CLASSIFICATION_DATA,
                f"Could not load classification for {race.id}: {exc}",
            ) from exc
        if not weekend.race:
            raise Rejection(
                RejectionCode.NO_CLASSIFICATION_DATA,
                f"No race classification for {race.id}",
            )
        return weekend

    def _score(
        self,
        race: Race,
        weekend: WeekendClassification,
        drivers: Mapping[str, Driver],
    ) -> RaceSyncCommit:
        league_ids = {league.id for league in self._store.list_leagues()}
        teams = self._store.list_teams()
        league_ids |= {team.league_id for team in teams}

        results: dict[str, RaceResults] = {}
        rules_by_league: dict[str, RuleSet] = {}
        for league_id in sorted(league_ids):
            rules = self._store.get_rules(league_id)
            rules_by_league[league_id] = rules
            results[league_id] = build_race_results(weekend, drivers, rules)

        team_results = tuple(
            build_team_result(
                team, race.id, results[team.league_id], rules_by_league[team.league_id],
            )
            for team in teams
        )

        # Season totals on the market are league independent.
        base = build_race_results(weekend, drivers, RuleSet())
        return RaceSyncCommit(
            race_id=race.id,
            results=results,
            team_results=team_results,
            driver_points=base.driver_points,
        )

    def _check_deadline(self, deadline: float | None, race_id: str) -> None:
        if deadline is not None and self._clock() >= deadline:
            raise Rejection(
                RejectionCode.SYNC_TIMEOUT,
                f"Sync of {race_id} timed out before anything was written",
            )

    @log_service_call
    def sync_race(self, race_id: str, *, timeout: float | None = None) -> SyncReport:
        """Score ``race_id`` for every league and mark it completed.

        Raises ``Rejection`` with ``race_not_found``, ``no_classification_data``
        or ``sync_timeout``; in each case nothing has been written.
        """
        timeout = timeout if timeout is not None else self._default_timeout
        deadline = self._clock() + timeout if timeout is not None else None

        with self._race_lock(race_id):
            race = self._store.get_race(race_id)
            if race is None:
                raise Rejection(RejectionCode.RACE_NOT_FOUND, f"Race {race_id} not found")
            if race.is_completed:
                get_logger().warning("Race %s already synced, nothing to do", race_id)
                return self._completed_report(race)

            weekend = self._fetch(race)
            self._check_deadline(deadline, race_id)

            drivers = self._store.get_drivers()
            unknown = sorted(_referenced_ids(weekend) - set(drivers))
            if unknown:
                raise Rejection(
                    RejectionCode.NO_CLASSIFICATION_DATA,
                    f"Classification references unknown drivers: {', '.join(unknown)}",
                )

            commit = self._score(race, weekend, drivers)
            self._check_deadline(deadline, race_id)

            if not self._store.commit_race_sync(commit):
                get_logger().warning("Race %s was completed by another sync", race_id)
                return self._completed_report(self._store.get_race(race_id) or race)

            return SyncReport(
                race_id=race_id,
                already_synced=False,
                results=dict(commit.results),
                team_results=commit.team_results,
            )
