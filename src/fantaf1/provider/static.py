"""Provider backed by classifications supplied up front."""

from __future__ import annotations

from collections.abc import Mapping

from fantaf1.exceptions import ProviderError
from fantaf1.models.classification import WeekendClassification
from fantaf1.models.race import Race

from .base import ClassificationProvider


class StaticClassificationProvider(ClassificationProvider):
    """Serves weekends keyed by race id; used for manual entry and tests."""

    def __init__(self, weekends: Mapping[str, WeekendClassification] | None = None) -> None:
        self._weekends: dict[str, WeekendClassification] = dict(weekends or {})

    def add(self, race_id: str, weekend: WeekendClassification) -> None:
        self._weekends[race_id] = weekend

    def fetch_weekend(self, race: Race) -> WeekendClassification:
        try:
            return self._weekends[race.id]
        except KeyError:
            raise ProviderError(f"No classification for race {race.id}") from None
