"""Fantasy game data models."""

from fantaf1.models.breakdown import Breakdown, BreakdownComponents
from fantaf1.models.classification import (
    Classification,
    Incidents,
    SessionKind,
    WeekendClassification,
)
from fantaf1.models.driver import Constructor, Driver
from fantaf1.models.race import Race, RaceResults
from fantaf1.models.rules import RuleSet
from fantaf1.models.team import League, Team
from fantaf1.models.team_result import DriverRole, TeamResult, TeamResultDriver

__all__ = [
    "Breakdown",
    "BreakdownComponents",
    "Classification",
    "Constructor",
    "Driver",
    "DriverRole",
    "Incidents",
    "League",
    "Race",
    "RaceResults",
    "RuleSet",
    "SessionKind",
    "Team",
    "TeamResult",
    "TeamResultDriver",
    "WeekendClassification",
]
