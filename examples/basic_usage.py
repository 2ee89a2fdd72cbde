"""Basic usage: build a league, trade drivers, score a race weekend."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from fantaf1 import Rejection
from fantaf1.models import Driver, League, Race, RuleSet, Team, WeekendClassification
from fantaf1.provider import StaticClassificationProvider
from fantaf1.services import (
    LineupService,
    MarketService,
    RaceSync,
    StandingsService,
    format_countdown,
    lock_state,
)
from fantaf1.store import InMemoryLeagueStore

DRIVERS = [
    Driver(id="ver", name="Max Verstappen", constructor_id="red_bull", price=Decimal("30")),
    Driver(id="law", name="Liam Lawson", constructor_id="red_bull", price=Decimal("12")),
    Driver(id="lec", name="Charles Leclerc", constructor_id="ferrari", price=Decimal("25")),
    Driver(id="ham", name="Lewis Hamilton", constructor_id="ferrari", price=Decimal("24")),
    Driver(id="nor", name="Lando Norris", constructor_id="mclaren", price=Decimal("28")),
    Driver(id="pia", name="Oscar Piastri", constructor_id="mclaren", price=Decimal("26")),
    Driver(id="gas", name="Pierre Gasly", constructor_id="alpine", price=Decimal("5")),
]


def main() -> None:
    now = datetime.now(timezone.utc)
    race = Race(
        id="chn",
        name="Chinese Grand Prix",
        round=2,
        city="Shanghai",
        country="China",
        qualifying_utc=now + timedelta(hours=3),
    )
    store = InMemoryLeagueStore(
        drivers=DRIVERS,
        leagues=[League(id="friends", name="Friends", rules=RuleSet(constructor_multipliers={"alpine": 1.2}))],
        teams=[
            Team(id="a", user_id="u1", league_id="friends", name="Alpha"),
            Team(id="b", user_id="u2", league_id="friends", name="Bravo"),
        ],
        races=[race],
    )

    # Fill both rosters through the market
    market = MarketService(store)
    for team_id, picks in (("a", ["ver", "lec", "gas"]), ("b", ["nor", "pia", "ham"])):
        for driver_id in picks:
            team = market.execute(team_id, buy_id=driver_id)
        print(f"{team.name}: {', '.join(team.driver_ids)} (budget left {team.budget})")

    try:
        market.execute("b", buy_id="ver")
    except Rejection as exc:
        print(f"  Rejected: {exc.to_dict()}")

    state = lock_state(race, now)
    print(f"\n=== Lineup lock: {state.status.value}, {format_countdown(state.time_to_lock)} to go ===")
    team = LineupService(store).set_lineup("a", captain_id="lec", reserve_id="gas", race_id="chn")
    print(f"  Alpha captain={team.captain_id} reserve={team.reserve_id}")

    weekend = WeekendClassification(
        quali={"ver": 1, "nor": 2, "lec": 3, "ham": 4, "pia": 5, "gas": 6, "law": 7},
        race={"nor": 1, "ver": 2, "lec": 3, "pia": 4, "gas": 5, "law": 6},
    )
    report = RaceSync(store, StaticClassificationProvider({"chn": weekend})).sync_race("chn")

    print("\n=== Driver points ===")
    for driver_id, points in sorted(
        report.results["friends"].driver_points.items(), key=lambda kv: -kv[1],
    ):
        print(f"  {driver_id}: {points:+.1f}")

    print("\n=== Standings ===")
    for row in StandingsService(store).league("friends"):
        print(f"  {row.rank}. {row.team_name} {row.points:.1f}")


if __name__ == "__main__":
    main()
