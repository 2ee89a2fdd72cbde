"""Classification provider backed by the OpenF1 API."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, TypeAdapter

from fantaf1.call_logging import get_logger, log_provider_call
from fantaf1.exceptions import ProviderError, ProviderValidationError
from fantaf1.models.classification import Classification, WeekendClassification
from fantaf1.models.driver import Driver
from fantaf1.models.race import Race
from fantaf1.settings import Settings, get_settings

from ._http import SyncTransport
from .base import ClassificationProvider

RACE_SESSION = "Race"
QUALIFYING_SESSION = "Qualifying"
SPRINT_SESSION = "Sprint"
SPRINT_QUALIFYING_SESSIONS = ("Sprint Qualifying", "Sprint Shootout")


class SessionRow(BaseModel):
    """Subset of an OpenF1 ``/sessions`` entry."""

    model_config = ConfigDict(frozen=True)

    session_key: int | None = None
    session_name: str | None = None
    session_type: str | None = None
    location: str | None = None
    country_name: str | None = None
    year: int | None = None
    date_start: datetime | None = None


class SessionResultRow(BaseModel):
    """Subset of an OpenF1 ``/session_result`` entry."""

    model_config = ConfigDict(frozen=True)

    driver_number: int | None = None
    position: int | None = None
    dnf: bool = False
    dns: bool = False
    dsq: bool = False
    session_key: int | None = None


T = TypeVar("T")


def _validate_list(model_type: type[T], data: list[dict[str, Any]]) -> list[T]:
    """Validate a list of dicts against a Pydantic model."""
    try:
        adapter = TypeAdapter(list[model_type])
        return adapter.validate_python(data)
    except Exception as exc:
        raise ProviderValidationError(
            f"Failed to validate {model_type.__name__} response: {exc}"
        ) from exc


class OpenF1ClassificationProvider(ClassificationProvider):
    """Looks sessions up by year/location/name and reads their final standings.

    Usage:
        with OpenF1ClassificationProvider.from_drivers(drivers) as provider:
            weekend = provider.fetch_weekend(race)
    """

    def __init__(
        self,
        driver_numbers: Mapping[int, str],
        base_url: str = "https://api.openf1.org/v1",
        timeout: float = 30.0,
        max_retries: int = 0,
    ) -> None:
        self._driver_numbers = dict(driver_numbers)
        self._transport = SyncTransport(base_url=base_url, timeout=timeout, max_retries=max_retries)

    @classmethod
    def from_drivers(
        cls,
        drivers: Iterable[Driver],
        settings: Settings | None = None,
    ) -> OpenF1ClassificationProvider:
        settings = settings or get_settings()
        return cls(
            {d.number: d.id for d in drivers if d.number is not None},
            base_url=settings.openf1_base_url,
            timeout=settings.http_timeout,
            max_retries=settings.provider_max_retries,
        )

    def __enter__(self) -> OpenF1ClassificationProvider:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection."""
        self._transport.close()

    # ── Endpoints ──────────────────────────────────────────────

    @log_provider_call
    def sessions(self, year: int, location: str, session_name: str) -> list[SessionRow]:
        params = [("year", str(year)), ("location", location), ("session_name", session_name)]
        return _validate_list(SessionRow, self._transport.get("/sessions", params))

    @log_provider_call
    def session_result(self, session_key: int) -> list[SessionResultRow]:
        params = [("session_key", str(session_key))]
        return _validate_list(SessionResultRow, self._transport.get("/session_result", params))

    # ── Classification ─────────────────────────────────────────

    def session_key(self, race: Race, session_name: str) -> int | None:
        for row in self.sessions(race.season, race.location, session_name):
            if row.session_key is not None:
                return row.session_key
        return None

    def classification(self, session_key: int) -> Classification:
        """Final positions by driver id. Unplaced, DNF, DNS and DSQ entries are left out."""
        result: Classification = {}
        for row in self.session_result(session_key):
            if row.position is None or row.dnf or row.dns or row.dsq:
                continue
            driver_id = self._driver_numbers.get(row.driver_number)
            if driver_id is None:
                continue
            result[driver_id] = row.position
        return result

    def _required(self, race: Race, session_name: str) -> Classification:
        key = self.session_key(race, session_name)
        if key is None:
            raise ProviderError(f"No {session_name} session for {race.location} {race.season}")
        return self.classification(key)

    def _sprint_qualifying(self, race: Race) -> Classification | None:
        primary, legacy = SPRINT_QUALIFYING_SESSIONS
        key = self.session_key(race, primary)
        if key is None:
            get_logger().warning(
                "No %s session for %s %d, trying %s", primary, race.location, race.season, legacy,
            )
            key = self.session_key(race, legacy)
        return self.classification(key) if key is not None else None

    def fetch_weekend(self, race: Race) -> WeekendClassification:
        if not race.location:
            raise ProviderError(f"Race {race.id} has no location to look sessions up by")

        race_classification = self._required(race, RACE_SESSION)
        quali = self._required(race, QUALIFYING_SESSION)

        sprint: Classification | None = None
        sprint_quali: Classification | None = None
        if race.is_sprint:
            sprint_key = self.session_key(race, SPRINT_SESSION)
            if sprint_key is not None:
                sprint = self.classification(sprint_key)
                sprint_quali = self._sprint_qualifying(race)

        return WeekendClassification(
            quali=quali,
            race=race_classification,
            sprint_quali=sprint_quali,
            sprint=sprint,
        )
