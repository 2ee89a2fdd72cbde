"""Scoring engines and the orchestration built on them."""

from fantaf1.services.aggregation import TeamScore, build_team_result, score_team, starter_dnf
from fantaf1.services.lock import (
    LockState,
    LockStatus,
    current_race,
    ensure_unlocked,
    format_countdown,
    lock_state,
)
from fantaf1.services.market import MarketService, validate_and_apply
from fantaf1.services.roster import LineupService, assign_lineup, sanitize, team_value
from fantaf1.services.scoring import (
    build_race_results,
    compute_driver_breakdown,
    compute_session_breakdowns,
    teammate_pairings,
)
from fantaf1.services.standings import (
    StandingRow,
    StandingsService,
    league_standings,
    race_leaderboard,
)
from fantaf1.services.sync import RaceSync, SyncReport

__all__ = [
    "LineupService",
    "LockState",
    "LockStatus",
    "MarketService",
    "RaceSync",
    "StandingRow",
    "StandingsService",
    "SyncReport",
    "TeamScore",
    "assign_lineup",
    "build_race_results",
    "build_team_result",
    "compute_driver_breakdown",
    "compute_session_breakdowns",
    "current_race",
    "ensure_unlocked",
    "format_countdown",
    "league_standings",
    "lock_state",
    "race_leaderboard",
    "sanitize",
    "score_team",
    "starter_dnf",
    "team_value",
    "teammate_pairings",
    "validate_and_apply",
]
