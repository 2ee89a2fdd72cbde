"""Classification provider contract."""

from __future__ import annotations

from abc import ABC, abstractmethod

from fantaf1.models.classification import WeekendClassification
from fantaf1.models.race import Race


class ClassificationProvider(ABC):
    """Source of official session classifications for a race weekend."""

    @abstractmethod
    def fetch_weekend(self, race: Race) -> WeekendClassification:
        """Return quali/race (and sprint, when the weekend has one) classifications.

        Raises ``ProviderError`` when the source cannot supply them.
        """
