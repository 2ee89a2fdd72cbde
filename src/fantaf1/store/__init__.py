"""Persistence layer: store contract and the in-memory implementation."""

from __future__ import annotations

from .base import LeagueStore, RaceSyncCommit, update_team
from .memory import InMemoryLeagueStore

__all__ = [
    "InMemoryLeagueStore",
    "LeagueStore",
    "RaceSyncCommit",
    "update_team",
]
