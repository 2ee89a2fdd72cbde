"""Market transaction validator: buy, sell and swap."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal

from fantaf1.call_logging import log_service_call
from fantaf1.constants import MAX_TEAM_SIZE
from fantaf1.exceptions import Rejection, RejectionCode
from fantaf1.models.driver import Driver
from fantaf1.models.team import Team
from fantaf1.services.roster import sanitize
from fantaf1.store.base import LeagueStore, update_team


def validate_and_apply(
    team: Team,
    drivers: Mapping[str, Driver],
    buy_id: str | None = None,
    sell_id: str | None = None,
) -> Team:
    """Validate a market operation and return the resulting team.

    Checks run in a fixed order and the first failure is raised as a
    ``Rejection``; ``team`` itself is never modified. Prices are read from
    ``drivers`` at call time. The lineup lock does not apply here.
    """
    owned = team.driver_ids

    if sell_id is not None and sell_id not in owned:
        raise Rejection(RejectionCode.NOT_OWNED, f"Driver {sell_id} is not in the team")
    if buy_id is not None and buy_id in owned and buy_id != sell_id:
        raise Rejection(RejectionCode.ALREADY_OWNED, f"Driver {buy_id} is already in the team")

    sold = bought = None
    if sell_id is not None:
        sold = drivers.get(sell_id)
        if sold is None:
            raise Rejection(RejectionCode.INVALID_DRIVER_OUT, f"Unknown driver {sell_id}")
    if buy_id is not None:
        bought = drivers.get(buy_id)
        if bought is None:
            raise Rejection(RejectionCode.INVALID_DRIVER_IN, f"Unknown driver {buy_id}")

    size = len(owned) - (1 if sold else 0) + (1 if bought else 0)
    if size > MAX_TEAM_SIZE:
        raise Rejection(RejectionCode.TEAM_FULL, f"A team holds at most {MAX_TEAM_SIZE} drivers")

    budget = team.budget
    if sold is not None:
        budget += sold.price
    if bought is not None:
        budget -= bought.price
    if budget < Decimal("0"):
        raise Rejection(
            RejectionCode.INSUFFICIENT_BUDGET,
            f"Budget {team.budget} cannot cover this operation",
        )

    # Selling and buying back the same driver changes nothing.
    if buy_id is not None and buy_id == sell_id:
        return sanitize(team)

    driver_ids = tuple(d for d in owned if d != sell_id)
    if buy_id is not None:
        driver_ids += (buy_id,)
    return sanitize(team.model_copy(update={"budget": budget, "driver_ids": driver_ids}))


class MarketService:
    """Runs market operations against stored teams, one team at a time."""

    def __init__(self, store: LeagueStore) -> None:
        self._store = store

    @log_service_call
    def execute(
        self,
        team_id: str,
        *,
        buy_id: str | None = None,
        sell_id: str | None = None,
    ) -> Team:
        return update_team(
            self._store,
            team_id,
            lambda team: validate_and_apply(
                team, self._store.get_drivers(), buy_id=buy_id, sell_id=sell_id,
            ),
        )
