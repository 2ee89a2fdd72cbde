"""Scoring engine: classification + rule set -> per-driver breakdowns.

Everything here is a pure function of its arguments. The engine never
reads settings or stores, and it never applies captain/reserve roles;
those belong to the team aggregator.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping

from fantaf1.constants import (
    LAST_PLACE_MIN_FIELD,
    Q2_CUTOFF,
    Q3_CUTOFF,
    TOP_BRACKET_LAST_POSITION,
)
from fantaf1.models.breakdown import Breakdown, BreakdownComponents
from fantaf1.models.classification import Classification, Incidents, SessionKind, WeekendClassification
from fantaf1.models.driver import Driver
from fantaf1.models.race import RaceResults
from fantaf1.models.rules import RuleSet
from fantaf1.points import round_points

_NO_INCIDENTS = Incidents()


def teammate_pairings(drivers: Iterable[Driver]) -> dict[str, str]:
    """Map each driver to their teammate.

    Only constructors with exactly two drivers are paired; anything else
    (mid-season swaps, a third driver) leaves those drivers unpaired.
    """
    by_constructor: dict[str, list[str]] = defaultdict(list)
    for driver in drivers:
        by_constructor[driver.constructor_id].append(driver.id)

    pairings: dict[str, str] = {}
    for members in by_constructor.values():
        if len(members) == 2:
            first, second = members
            pairings[first] = second
            pairings[second] = first
    return pairings


def position_points(finish: int | None, table: tuple[float, ...]) -> float:
    if finish is None or not 1 <= finish <= len(table):
        return 0.0
    return float(table[finish - 1])


def qualifying_session_points(grid: int | None, rules: RuleSet) -> float:
    """Q3/Q2/Q1 outcome; exactly one applies whenever a grid slot exists."""
    if grid is None:
        return 0.0
    if grid <= Q3_CUTOFF:
        return rules.quali_q3_reached
    if grid <= Q2_CUTOFF:
        return rules.quali_q2_reached
    return rules.quali_q1_eliminated


def overtake_points(grid: int | None, finish: int | None, rules: RuleSet) -> float:
    """Walk every position between grid and finish, one bracket value per step."""
    if grid is None or finish is None or grid == finish:
        return 0.0

    points = 0.0
    if grid > finish:
        for position in range(grid - 1, finish - 1, -1):
            if position <= TOP_BRACKET_LAST_POSITION:
                points += rules.position_gained_top10
            else:
                points += rules.position_gained_outside
    else:
        for position in range(grid + 1, finish + 1):
            if position <= TOP_BRACKET_LAST_POSITION:
                points += rules.position_lost_top10
            else:
                points += rules.position_lost_outside
    return points


def teammate_points(
    finish: int | None,
    teammate_finish: int | None,
    rules: RuleSet,
) -> float:
    """Teammate duel. Only a classified driver takes part in it."""
    if finish is None:
        return 0.0
    if teammate_finish is None:
        return rules.teammate_beat_dnf
    if finish < teammate_finish:
        return rules.teammate_beat
    return rules.teammate_lost


def is_last_place(finish: int | None, classification: Classification) -> bool:
    if finish is None or not classification:
        return False
    last = max(classification.values())
    return finish == last and last > LAST_PLACE_MIN_FIELD


def compute_driver_breakdown(
    driver_id: str,
    classification: Classification,
    grid: Classification,
    rules: RuleSet,
    *,
    teammate_id: str | None = None,
    constructor_id: str | None = None,
    session: SessionKind = SessionKind.RACE,
    incidents: Incidents | None = None,
) -> Breakdown:
    """Score one driver for one session.

    Race-related and qualifying-related components are summed separately,
    each is scaled by the constructor multiplier, then rounded for
    publication. ``total`` is rounded from the unrounded subtotals.
    """
    incidents = incidents or _NO_INCIDENTS
    finish = classification.get(driver_id)
    start = grid.get(driver_id)
    is_sprint = session is SessionKind.SPRINT

    table = rules.sprint_position_points if is_sprint else rules.race_position_points
    pole_bonus = rules.sprint_pole if is_sprint else rules.quali_pole

    teammate = 0.0
    if teammate_id is not None:
        teammate = teammate_points(finish, classification.get(teammate_id), rules)

    components = BreakdownComponents(
        position=position_points(finish, table),
        overtakes=overtake_points(start, finish, rules),
        teammate=teammate,
        dnf=rules.race_dnf if finish is None else 0.0,
        last_place=rules.race_last_place_malus if is_last_place(finish, classification) else 0.0,
        penalty=rules.race_penalty if driver_id in incidents.race_penalties else 0.0,
        fastest_lap=rules.race_fastest_lap if incidents.fastest_lap == driver_id else 0.0,
        pole=pole_bonus if start == 1 else 0.0,
        quali_session=0.0 if is_sprint else qualifying_session_points(start, rules),
        grid_penalty=rules.quali_grid_penalty if driver_id in incidents.grid_penalties else 0.0,
    )

    multiplier = rules.multiplier_for(constructor_id)
    race_raw = components.race_subtotal * multiplier
    quali_raw = components.quali_subtotal * multiplier

    return Breakdown(
        driver_id=driver_id,
        session=session,
        finished=finish is not None,
        race=round_points(race_raw),
        quali=round_points(quali_raw),
        total=round_points(race_raw + quali_raw),
        multiplier=multiplier,
        components=components,
    )


def compute_session_breakdowns(
    classification: Classification,
    grid: Classification,
    drivers: Mapping[str, Driver],
    rules: RuleSet,
    *,
    session: SessionKind = SessionKind.RACE,
    incidents: Incidents | None = None,
    pairings: Mapping[str, str] | None = None,
) -> dict[str, Breakdown]:
    """Score every driver that appears in the grid or the classification."""
    if pairings is None:
        pairings = teammate_pairings(drivers.values())

    breakdowns: dict[str, Breakdown] = {}
    for driver_id in sorted(set(grid) | set(classification)):
        driver = drivers.get(driver_id)
        breakdowns[driver_id] = compute_driver_breakdown(
            driver_id,
            classification,
            grid,
            rules,
            teammate_id=pairings.get(driver_id),
            constructor_id=driver.constructor_id if driver else None,
            session=session,
            incidents=incidents,
        )
    return breakdowns


def build_race_results(
    weekend: WeekendClassification,
    drivers: Mapping[str, Driver],
    rules: RuleSet,
) -> RaceResults:
    """Score a whole weekend into the persisted results payload.

    On sprint weekends each driver's published points are the race and
    sprint breakdowns added together.
    """
    pairings = teammate_pairings(drivers.values())
    race_breakdown = compute_session_breakdowns(
        weekend.race,
        weekend.quali,
        drivers,
        rules,
        session=SessionKind.RACE,
        incidents=weekend.incidents,
        pairings=pairings,
    )

    sprint_breakdown: dict[str, Breakdown] | None = None
    if weekend.has_sprint:
        sprint_breakdown = compute_session_breakdowns(
            weekend.sprint or {},
            weekend.sprint_quali or {},
            drivers,
            rules,
            session=SessionKind.SPRINT,
            incidents=weekend.sprint_incidents,
            pairings=pairings,
        )

    driver_points: dict[str, float] = {}
    driver_race_points: dict[str, float] = {}
    driver_quali_points: dict[str, float] = {}
    scored_ids = set(race_breakdown) | set(sprint_breakdown or {})
    for driver_id in sorted(scored_ids):
        parts = [race_breakdown.get(driver_id)]
        if sprint_breakdown is not None:
            parts.append(sprint_breakdown.get(driver_id))
        present = [b for b in parts if b is not None]
        driver_points[driver_id] = round_points(sum(b.total for b in present))
        driver_race_points[driver_id] = round_points(sum(b.race for b in present))
        driver_quali_points[driver_id] = round_points(sum(b.quali for b in present))

    return RaceResults(
        quali=dict(weekend.quali),
        race=dict(weekend.race),
        sprint_quali=dict(weekend.sprint_quali) if weekend.sprint_quali is not None else None,
        sprint=dict(weekend.sprint) if weekend.sprint is not None else None,
        driver_points=driver_points,
        driver_race_points=driver_race_points,
        driver_quali_points=driver_quali_points,
        driver_breakdown=race_breakdown,
        sprint_breakdown=sprint_breakdown,
    )
