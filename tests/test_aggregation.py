"""Tests for team score aggregation."""

from __future__ import annotations

from fantaf1.models import DriverRole, RaceResults, RuleSet
from fantaf1.services.aggregation import build_team_result, score_team, starter_dnf
from tests.conftest import make_team

FULL_FIELD = {"ver": 1, "lec": 2, "nor": 3, "alo": 4, "gas": 5}
POINTS = {"ver": 10.0, "lec": 8.0, "nor": 6.0, "alo": 4.0, "gas": 20.0}


def _roles(score) -> dict[str, DriverRole]:
    return {d.driver_id: d.role for d in score.drivers}


def _points(score) -> dict[str, float]:
    return {d.driver_id: d.points for d in score.drivers}


class TestStarterDnf:
    def test_all_starters_finished(self) -> None:
        team = make_team(captain_id="ver", reserve_id="gas")
        assert not starter_dnf(team, FULL_FIELD)

    def test_reserve_dnf_does_not_count(self) -> None:
        team = make_team(captain_id="ver", reserve_id="gas")
        classification = {k: v for k, v in FULL_FIELD.items() if k != "gas"}
        assert not starter_dnf(team, classification)

    def test_starter_missing(self) -> None:
        team = make_team(captain_id="ver", reserve_id="gas")
        classification = {k: v for k, v in FULL_FIELD.items() if k != "alo"}
        assert starter_dnf(team, classification)


class TestScoreTeam:
    def test_reserve_benched_when_starters_finish(self) -> None:
        team = make_team(captain_id="ver", reserve_id="gas")
        score = score_team(team, POINTS, FULL_FIELD)
        assert _points(score)["gas"] == 0
        assert _roles(score)["gas"] is DriverRole.BENCHED
        assert score.total == 15 + 8 + 6 + 4

    def test_reserve_insures_starter_dnf(self) -> None:
        team = make_team(captain_id="ver", reserve_id="gas")
        classification = {k: v for k, v in FULL_FIELD.items() if k != "alo"}
        points = {**POINTS, "alo": -5.0}
        score = score_team(team, points, classification)
        assert _points(score)["gas"] == 20
        assert _roles(score)["gas"] is DriverRole.RESERVE
        assert score.total == 15 + 8 + 6 - 5 + 20

    def test_captain_multiplier(self) -> None:
        team = make_team(captain_id="ver", reserve_id="gas")
        assert _points(score_team(team, POINTS, FULL_FIELD))["ver"] == 15
        doubled = score_team(team, POINTS, FULL_FIELD, captain_multiplier=2.0)
        assert _points(doubled)["ver"] == 20
        assert _roles(doubled)["ver"] is DriverRole.CAPTAIN

    def test_negative_captain_is_multiplied_too(self) -> None:
        team = make_team(("ver", "lec"), captain_id="ver")
        score = score_team(team, {"ver": -4.0, "lec": 2.0}, {"lec": 1})
        assert _points(score)["ver"] == -6
        assert score.total == -4

    def test_missing_driver_points_count_as_zero(self) -> None:
        team = make_team(("ver", "lec"), captain_id="ver")
        score = score_team(team, {"ver": 2.0}, {"ver": 1, "lec": 2})
        assert _points(score)["lec"] == 0
        assert score.total == 3

    def test_stored_values_rounded_separately(self) -> None:
        team = make_team(("ver", "lec"))
        score = score_team(team, {"ver": 0.25, "lec": 0.25}, {"ver": 1, "lec": 2})
        assert [d.points for d in score.drivers] == [0.3, 0.3]
        assert score.total == 0.5

    def test_every_driver_has_exactly_one_role(self) -> None:
        team = make_team(captain_id="ver", reserve_id="gas")
        score = score_team(team, POINTS, FULL_FIELD)
        assert [d.driver_id for d in score.drivers] == list(team.driver_ids)
        assert _roles(score) == {
            "ver": DriverRole.CAPTAIN,
            "lec": DriverRole.STARTER,
            "nor": DriverRole.STARTER,
            "alo": DriverRole.STARTER,
            "gas": DriverRole.BENCHED,
        }


class TestBuildTeamResult:
    def test_snapshot_from_payload(self) -> None:
        team = make_team(captain_id="ver", reserve_id="gas")
        results = RaceResults(race=FULL_FIELD, driver_points=POINTS)
        snapshot = build_team_result(team, "r1", results, RuleSet(captain_multiplier=2.0))
        assert snapshot.team_id == "t1"
        assert snapshot.race_id == "r1"
        assert snapshot.league_id == "lg1"
        assert snapshot.captain_id == "ver"
        assert snapshot.reserve_id == "gas"
        assert snapshot.points == 20 + 8 + 6 + 4

    def test_same_total_after_payload_reload(self) -> None:
        team = make_team(captain_id="ver", reserve_id="gas")
        results = RaceResults(race=FULL_FIELD, driver_points=POINTS)
        reloaded = RaceResults.model_validate(results.to_json_dict())
        rules = RuleSet()
        assert (
            build_team_result(team, "r1", reloaded, rules).points
            == build_team_result(team, "r1", results, rules).points
        )
