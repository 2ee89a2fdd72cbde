"""Tests for the in-memory store and the team update helper."""

from __future__ import annotations

from decimal import Decimal

import pytest

from fantaf1.exceptions import Rejection, RejectionCode, StoreConflictError
from fantaf1.models import RaceResults, RuleSet, TeamResult
from fantaf1.store import InMemoryLeagueStore, RaceSyncCommit, update_team


class _RacingStore(InMemoryLeagueStore):
    """Bumps the stored version right before the first ``conflicts`` saves."""

    def __init__(self, *args, conflicts: int = 1, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.conflicts = conflicts
        self.saves = 0

    def save_team(self, team, *, expected_version):
        self.saves += 1
        if self.conflicts:
            self.conflicts -= 1
            current = self.get_team(team.id)
            self.put_team(current.model_copy(update={"version": current.version + 1}))
        return super().save_team(team, expected_version=expected_version)


class TestReads:
    def test_list_races_by_round(self, store) -> None:
        assert [r.id for r in store.list_races()] == ["r1", "r2"]

    def test_list_teams_by_league(self, store) -> None:
        assert {t.id for t in store.list_teams("lg1")} == {"t1", "t2"}
        assert {t.id for t in store.list_teams()} == {"t1", "t2", "t3"}

    def test_rules(self, store) -> None:
        assert store.get_rules("lg2").captain_multiplier == 2.0
        assert store.get_rules("missing") == RuleSet()

    def test_get_drivers_returns_copy(self, store) -> None:
        store.get_drivers().clear()
        assert "ver" in store.get_drivers()


class TestSaveTeam:
    def test_bumps_version(self, store) -> None:
        team = store.get_team("t1")
        saved = store.save_team(team.model_copy(update={"budget": Decimal("1")}), expected_version=0)
        assert saved.version == 1
        assert store.get_team("t1").budget == Decimal("1")

    def test_stale_version(self, store) -> None:
        team = store.get_team("t1")
        store.save_team(team, expected_version=0)
        with pytest.raises(StoreConflictError):
            store.save_team(team, expected_version=0)

    def test_unknown_team(self, store) -> None:
        team = store.get_team("t1").model_copy(update={"id": "zz"})
        with pytest.raises(Rejection) as exc_info:
            store.save_team(team, expected_version=0)
        assert exc_info.value.code is RejectionCode.TEAM_NOT_FOUND


class TestUpdateTeam:
    def test_retries_on_conflict(self, store) -> None:
        racing = _RacingStore(teams=store.list_teams(), conflicts=1)
        updated = update_team(racing, "t1", lambda t: t.model_copy(update={"name": "Renamed"}))
        assert racing.saves == 2
        assert updated.name == "Renamed"
        assert updated.version == 2

    def test_gives_up(self, store) -> None:
        racing = _RacingStore(teams=store.list_teams(), conflicts=5)
        with pytest.raises(StoreConflictError):
            update_team(racing, "t1", lambda t: t, attempts=3)
        assert racing.saves == 3

    def test_conflict_is_logged(self, store, _log_to_tmp) -> None:
        racing = _RacingStore(teams=store.list_teams(), conflicts=1)
        update_team(racing, "t1", lambda t: t)
        content = (_log_to_tmp / "calls.log").read_text()
        assert "Version conflict on team t1" in content

    def test_mutation_rejection_propagates(self, store) -> None:
        def refuse(team):
            raise Rejection(RejectionCode.TEAM_FULL)

        with pytest.raises(Rejection):
            update_team(store, "t1", refuse)
        assert store.get_team("t1").version == 0


class TestCommitRaceSync:
    def _commit(self, points: float = 12.5) -> RaceSyncCommit:
        return RaceSyncCommit(
            race_id="r1",
            results={"lg1": RaceResults(race={"ver": 1}, driver_points={"ver": 25.0})},
            team_results=(TeamResult(team_id="t1", race_id="r1", league_id="lg1", points=points),),
            driver_points={"ver": 25.0, "unknown": 3.0},
        )

    def test_applies_everything(self, store) -> None:
        assert store.commit_race_sync(self._commit())
        race = store.get_race("r1")
        assert race.is_completed
        assert race.results["lg1"].driver_points == {"ver": 25.0}
        assert store.get_team("t1").total_points == 12.5
        assert store.get_team("t1").version == 1
        assert store.get_team("t2").version == 0
        assert store.get_drivers()["ver"].points == 25.0
        assert len(store.list_team_results(race_id="r1")) == 1

    def test_second_commit_is_refused(self, store) -> None:
        store.commit_race_sync(self._commit())
        assert not store.commit_race_sync(self._commit(points=99))
        assert store.get_team("t1").total_points == 12.5
        assert len(store.list_team_results()) == 1

    def test_unknown_race(self, store) -> None:
        commit = RaceSyncCommit(race_id="nope", results={})
        with pytest.raises(Rejection) as exc_info:
            store.commit_race_sync(commit)
        assert exc_info.value.code is RejectionCode.RACE_NOT_FOUND

    def test_unknown_team_writes_nothing(self, store) -> None:
        commit = RaceSyncCommit(
            race_id="r1",
            results={},
            team_results=(
                TeamResult(team_id="t1", race_id="r1", league_id="lg1", points=5),
                TeamResult(team_id="ghost", race_id="r1", league_id="lg1", points=5),
            ),
        )
        with pytest.raises(Rejection) as exc_info:
            store.commit_race_sync(commit)
        assert exc_info.value.code is RejectionCode.TEAM_NOT_FOUND
        assert store.get_team("t1").total_points == 0
        assert not store.get_race("r1").is_completed
