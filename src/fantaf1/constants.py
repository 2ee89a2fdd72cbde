"""Shared constants for the fantasy game."""

from __future__ import annotations

from datetime import timedelta

MAX_TEAM_SIZE = 5
MIN_DRIVERS_FOR_RESERVE = 2

DEFAULT_RACE_POINTS: tuple[float, ...] = (25, 18, 15, 12, 10, 8, 6, 4, 2, 1) + (0,) * 12
DEFAULT_SPRINT_POINTS: tuple[float, ...] = (8, 7, 6, 5, 4, 3, 2, 1)

# Grid slots 1..10 reach Q3, 11..15 drop out in Q2, the rest in Q1.
Q3_CUTOFF = 10
Q2_CUTOFF = 15

# Overtakes landing on P1..P10 use the top bracket values.
TOP_BRACKET_LAST_POSITION = 10

# Last-place malus only applies to classifications longer than this.
LAST_PLACE_MIN_FIELD = 10

LOCK_LEAD_TIME = timedelta(minutes=5)
CLOSING_SOON_WINDOW = timedelta(minutes=30)

# Placeholder written by the admin tooling before a session time is known.
UNSET_SESSION_MARKERS = frozenset({"", "TODO_UTC"})
