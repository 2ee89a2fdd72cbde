"""Lineup lock calculator."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum

from fantaf1.constants import CLOSING_SOON_WINDOW, LOCK_LEAD_TIME
from fantaf1.exceptions import Rejection, RejectionCode
from fantaf1.models.race import Race


class LockStatus(str, Enum):
    UNCONFIGURED = "unconfigured"
    OPEN = "open"
    CLOSING_SOON = "closing_soon"
    LOCKED = "locked"


@dataclass(frozen=True)
class LockState:
    status: LockStatus
    session_utc: datetime | None = None
    lock_utc: datetime | None = None
    time_to_lock: timedelta | None = None

    @property
    def is_locked(self) -> bool:
        return self.status is LockStatus.LOCKED


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def lock_state(race: Race, now: datetime) -> LockState:
    """Lock state of a race weekend at ``now``.

    The lock instant is five minutes before sprint qualifying on sprint
    weekends, before qualifying otherwise. Reaching the lock instant
    exactly counts as locked.
    """
    session = race.lock_session_utc
    if session is None:
        return LockState(status=LockStatus.UNCONFIGURED)

    session = _as_utc(session)
    lock_at = session - LOCK_LEAD_TIME
    remaining = lock_at - _as_utc(now)

    if remaining <= timedelta(0):
        status = LockStatus.LOCKED
    elif remaining <= CLOSING_SOON_WINDOW:
        status = LockStatus.CLOSING_SOON
    else:
        status = LockStatus.OPEN

    return LockState(
        status=status,
        session_utc=session,
        lock_utc=lock_at,
        time_to_lock=remaining,
    )


def ensure_unlocked(race: Race | None, now: datetime) -> None:
    """Raise ``lineup_locked`` when captain/reserve changes are frozen."""
    if race is not None and lock_state(race, now).is_locked:
        raise Rejection(RejectionCode.LINEUP_LOCKED, f"Lineup for {race.name} is locked")


def current_race(races: Iterable[Race]) -> Race | None:
    """First race not yet completed by round, else the last race of the season."""
    ordered = sorted(races, key=lambda r: r.round)
    if not ordered:
        return None
    return next((r for r in ordered if not r.is_completed), ordered[-1])


def format_countdown(delta: timedelta | None) -> str:
    """Render time-to-lock as HH:MM:SS, clamped at zero."""
    if delta is None or delta < timedelta(0):
        delta = timedelta(0)
    total_seconds = int(delta.total_seconds())
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
