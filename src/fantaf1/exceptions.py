"""Custom exceptions for the fantasy scoring engine."""

from __future__ import annotations

from enum import Enum


class FantaF1Error(Exception):
    """Base exception for all engine errors."""


class RejectionCode(str, Enum):
    """Stable identifiers surfaced to the calling layer."""

    TEAM_NOT_FOUND = "team_not_found"
    NOT_OWNED = "not_owned"
    ALREADY_OWNED = "already_owned"
    INVALID_DRIVER_IN = "invalid_driver_in"
    INVALID_DRIVER_OUT = "invalid_driver_out"
    INSUFFICIENT_BUDGET = "insufficient_budget"
    TEAM_FULL = "team_full"
    LINEUP_LOCKED = "lineup_locked"
    RACE_NOT_FOUND = "race_not_found"
    NO_CLASSIFICATION_DATA = "no_classification_data"
    SYNC_TIMEOUT = "sync_timeout"


class Rejection(FantaF1Error):
    """Raised when a request is refused. State is never mutated before this is raised."""

    def __init__(self, code: RejectionCode, message: str = "") -> None:
        self.code = RejectionCode(code)
        self.message = message or self.code.value
        super().__init__(f"{self.code.value}: {self.message}")

    def to_dict(self) -> dict[str, str]:
        return {"error": self.code.value, "message": self.message}


class ProviderError(FantaF1Error):
    """Base exception for classification provider failures."""


class ProviderConnectionError(ProviderError):
    """Raised when the provider cannot be reached."""


class ProviderTimeoutError(ProviderError):
    """Raised when a provider request times out."""


class ProviderAPIError(ProviderError):
    """Raised when the provider returns an error response (4xx/5xx)."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message}")


class ProviderValidationError(ProviderError):
    """Raised when provider data fails model validation."""


class StoreConflictError(FantaF1Error):
    """Raised when a team write is based on a stale version."""
