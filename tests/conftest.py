"""Shared test fixtures and sample data."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from fantaf1 import call_logging
from fantaf1.models import Driver, League, Race, RuleSet, Team
from fantaf1.store import InMemoryLeagueStore

BASE_URL = "https://api.openf1.org/v1"

NOW = datetime(2026, 3, 14, 12, 0, tzinfo=timezone.utc)


# ── Sample data ──────────────────────────────────────────────────────────────

SAMPLE_DRIVERS = [
    Driver(id="ver", name="Max Verstappen", constructor_id="red_bull", price=Decimal("30"), number=1),
    Driver(id="law", name="Liam Lawson", constructor_id="red_bull", price=Decimal("12"), number=30),
    Driver(id="lec", name="Charles Leclerc", constructor_id="ferrari", price=Decimal("25"), number=16),
    Driver(id="ham", name="Lewis Hamilton", constructor_id="ferrari", price=Decimal("24"), number=44),
    Driver(id="nor", name="Lando Norris", constructor_id="mclaren", price=Decimal("28"), number=4),
    Driver(id="pia", name="Oscar Piastri", constructor_id="mclaren", price=Decimal("26"), number=81),
    Driver(id="alo", name="Fernando Alonso", constructor_id="aston_martin", price=Decimal("10"), number=14),
    Driver(id="str", name="Lance Stroll", constructor_id="aston_martin", price=Decimal("8"), number=18),
    Driver(id="gas", name="Pierre Gasly", constructor_id="alpine", price=Decimal("5"), number=10),
    Driver(id="col", name="Franco Colapinto", constructor_id="alpine", price=Decimal("3"), number=43),
    Driver(id="bot", name="Valtteri Bottas", constructor_id="cadillac", price=Decimal("2"), number=77),
]

SAMPLE_SESSION_ROW = {
    "circuit_short_name": "Shanghai",
    "country_name": "China",
    "date_start": "2026-03-15T07:00:00+00:00",
    "location": "Shanghai",
    "meeting_key": 1280,
    "session_key": 9998,
    "session_name": "Race",
    "session_type": "Race",
    "year": 2026,
}

SAMPLE_RESULT_ROWS = [
    {"driver_number": 4, "position": 1, "dnf": False, "dns": False, "dsq": False, "session_key": 9998},
    {"driver_number": 1, "position": 2, "dnf": False, "dns": False, "dsq": False, "session_key": 9998},
    {"driver_number": 16, "position": 3, "dnf": False, "dns": False, "dsq": False, "session_key": 9998},
    {"driver_number": 44, "position": None, "dnf": True, "dns": False, "dsq": False, "session_key": 9998},
    {"driver_number": 81, "position": 5, "dnf": False, "dns": False, "dsq": True, "session_key": 9998},
    {"driver_number": 99, "position": 6, "dnf": False, "dns": False, "dsq": False, "session_key": 9998},
]


# ── Factories ────────────────────────────────────────────────────────────────


def make_team(
    driver_ids: tuple[str, ...] = ("ver", "lec", "nor", "alo", "gas"),
    *,
    team_id: str = "t1",
    league_id: str = "lg1",
    budget: str = "0",
    captain_id: str | None = None,
    reserve_id: str | None = None,
    name: str = "My F1 Team",
    total_points: float = 0.0,
) -> Team:
    return Team(
        id=team_id,
        user_id=f"user-{team_id}",
        league_id=league_id,
        name=name,
        budget=Decimal(budget),
        driver_ids=driver_ids,
        captain_id=captain_id,
        reserve_id=reserve_id,
        total_points=total_points,
    )


def make_race(
    race_id: str = "r1",
    *,
    round_: int = 1,
    is_sprint: bool = False,
    qualifying_utc: datetime | str | None = None,
    sprint_qualifying_utc: datetime | str | None = None,
    is_completed: bool = False,
) -> Race:
    return Race(
        id=race_id,
        name=f"Grand Prix {round_}",
        round=round_,
        city="Shanghai",
        country="China",
        is_sprint=is_sprint,
        qualifying_utc=qualifying_utc,
        sprint_qualifying_utc=sprint_qualifying_utc,
        is_completed=is_completed,
    )


# ── Fixtures ─────────────────────────────────────────────────────────────────


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def drivers() -> dict[str, Driver]:
    return {d.id: d for d in SAMPLE_DRIVERS}


@pytest.fixture
def rules() -> RuleSet:
    return RuleSet()


@pytest.fixture
def store() -> InMemoryLeagueStore:
    """Two leagues, three teams, two races (the first locks in one hour)."""
    return InMemoryLeagueStore(
        drivers=SAMPLE_DRIVERS,
        leagues=[
            League(id="lg1", name="Friends"),
            League(id="lg2", name="Double", rules=RuleSet(captain_multiplier=2.0)),
        ],
        teams=[
            make_team(team_id="t1", name="Alpha", captain_id="ver", reserve_id="gas"),
            make_team(
                ("nor", "pia", "ham", "str", "col"),
                team_id="t2", name="Bravo", budget="5", captain_id="nor", reserve_id="col",
            ),
            make_team(("lec", "law"), team_id="t3", league_id="lg2", name="Charlie", budget="50", captain_id="lec"),
        ],
        races=[
            make_race("r1", round_=1, qualifying_utc=datetime(2026, 3, 14, 13, 0, tzinfo=timezone.utc)),
            make_race("r2", round_=2, qualifying_utc="TODO_UTC"),
        ],
    )


@pytest.fixture(autouse=True)
def _log_to_tmp(tmp_path):
    """Send the call logger to tmp_path for every test."""
    old_logger = call_logging._logger
    old_dir = call_logging._LOG_DIR

    logging.getLogger(call_logging.LOGGER_NAME).handlers.clear()
    call_logging._logger = None
    call_logging._LOG_DIR = str(tmp_path)

    yield tmp_path

    if call_logging._logger is not None:
        for h in call_logging._logger.handlers[:]:
            h.close()
            call_logging._logger.removeHandler(h)

    call_logging._logger = old_logger
    call_logging._LOG_DIR = old_dir
