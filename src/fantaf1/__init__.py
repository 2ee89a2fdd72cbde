"""fantaf1: scoring and roster integrity engine for a fantasy F1 game."""

from fantaf1.exceptions import (
    FantaF1Error,
    ProviderAPIError,
    ProviderConnectionError,
    ProviderError,
    ProviderTimeoutError,
    ProviderValidationError,
    Rejection,
    RejectionCode,
    StoreConflictError,
)
from fantaf1.points import round_points
from fantaf1.settings import Settings, get_settings

__all__ = [
    "FantaF1Error",
    "ProviderAPIError",
    "ProviderConnectionError",
    "ProviderError",
    "ProviderTimeoutError",
    "ProviderValidationError",
    "Rejection",
    "RejectionCode",
    "Settings",
    "StoreConflictError",
    "get_settings",
    "round_points",
]

__version__ = "0.1.0"
