"""Roster invariant sanitizer and captain/reserve assignment."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from decimal import Decimal

from fantaf1.call_logging import log_service_call
from fantaf1.constants import MAX_TEAM_SIZE, MIN_DRIVERS_FOR_RESERVE
from fantaf1.exceptions import Rejection, RejectionCode
from fantaf1.models.driver import Driver
from fantaf1.models.race import Race
from fantaf1.models.team import Team
from fantaf1.services.lock import current_race, ensure_unlocked
from fantaf1.store.base import LeagueStore, update_team


def _latest_non_captain(driver_ids: tuple[str, ...], captain_id: str | None) -> str | None:
    return next((d for d in reversed(driver_ids) if d != captain_id), None)


def sanitize(team: Team) -> Team:
    """Bring captain/reserve back in line with the owned drivers.

    Rules run in order and later ones may undo earlier ones:
    drop roles on drivers no longer owned, default the captain to the
    first acquired driver, drop the reserve below two drivers, default
    the reserve on a full roster to the latest acquired non-captain, and
    never let captain and reserve be the same driver.
    """
    driver_ids = team.driver_ids
    captain_id = team.captain_id if team.owns(team.captain_id) else None
    reserve_id = team.reserve_id if team.owns(team.reserve_id) else None

    if captain_id is None and driver_ids:
        captain_id = driver_ids[0]

    if len(driver_ids) < MIN_DRIVERS_FOR_RESERVE:
        reserve_id = None

    roster_full = len(driver_ids) == MAX_TEAM_SIZE
    if roster_full and reserve_id is None:
        reserve_id = _latest_non_captain(driver_ids, captain_id)

    if captain_id is not None and captain_id == reserve_id:
        reserve_id = None
        if roster_full:
            reserve_id = _latest_non_captain(driver_ids, captain_id)

    if captain_id == team.captain_id and reserve_id == team.reserve_id:
        return team
    return team.model_copy(update={"captain_id": captain_id, "reserve_id": reserve_id})


def set_captain(team: Team, driver_id: str) -> Team:
    """Make ``driver_id`` captain; if it was the reserve, the old captain takes the bench."""
    if not team.owns(driver_id):
        raise Rejection(RejectionCode.NOT_OWNED, f"Driver {driver_id} is not in the team")
    reserve_id = team.reserve_id
    if reserve_id == driver_id:
        reserve_id = team.captain_id
    return sanitize(team.model_copy(update={"captain_id": driver_id, "reserve_id": reserve_id}))


def set_reserve(team: Team, driver_id: str) -> Team:
    """Make ``driver_id`` reserve; a displaced captain is replaced by the old reserve."""
    if not team.owns(driver_id):
        raise Rejection(RejectionCode.NOT_OWNED, f"Driver {driver_id} is not in the team")
    captain_id = team.captain_id
    if captain_id == driver_id:
        captain_id = team.reserve_id or next(
            (d for d in team.driver_ids if d != driver_id), None,
        )
    return sanitize(team.model_copy(update={"captain_id": captain_id, "reserve_id": driver_id}))


def assign_lineup(
    team: Team,
    race: Race | None,
    now: datetime,
    *,
    captain_id: str | None = None,
    reserve_id: str | None = None,
) -> Team:
    """Change captain and/or reserve, refused once the race weekend is locked."""
    ensure_unlocked(race, now)
    for driver_id in (captain_id, reserve_id):
        if driver_id is not None and not team.owns(driver_id):
            raise Rejection(RejectionCode.NOT_OWNED, f"Driver {driver_id} is not in the team")

    updated = team
    if captain_id is not None:
        updated = set_captain(updated, captain_id)
    if reserve_id is not None:
        updated = set_reserve(updated, reserve_id)
    return sanitize(updated)


def team_value(team: Team, drivers: Mapping[str, Driver]) -> Decimal:
    """Remaining budget plus the current price of every owned driver."""
    owned = sum((drivers[d].price for d in team.driver_ids if d in drivers), Decimal("0"))
    return team.budget + owned


class LineupService:
    """Applies lineup changes to stored teams."""

    def __init__(
        self,
        store: LeagueStore,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def _lock_race(self, race_id: str | None) -> Race | None:
        if race_id is None:
            return current_race(self._store.list_races())
        race = self._store.get_race(race_id)
        if race is None:
            raise Rejection(RejectionCode.RACE_NOT_FOUND, f"Race {race_id} not found")
        return race

    @log_service_call
    def set_lineup(
        self,
        team_id: str,
        *,
        captain_id: str | None = None,
        reserve_id: str | None = None,
        race_id: str | None = None,
    ) -> Team:
        race = self._lock_race(race_id)
        now = self._clock()
        return update_team(
            self._store,
            team_id,
            lambda team: assign_lineup(
                team, race, now, captain_id=captain_id, reserve_id=reserve_id,
            ),
        )
