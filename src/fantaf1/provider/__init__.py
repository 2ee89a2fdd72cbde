"""Classification providers."""

from __future__ import annotations

from .base import ClassificationProvider
from .openf1 import OpenF1ClassificationProvider
from .static import StaticClassificationProvider

__all__ = [
    "ClassificationProvider",
    "OpenF1ClassificationProvider",
    "StaticClassificationProvider",
]
