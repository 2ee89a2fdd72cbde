"""Driver and constructor models."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class Constructor(BaseModel):
    """Real-world team. Its scoring multiplier lives in the league rule set."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    color: str | None = None


class Driver(BaseModel):
    """Market entry for a driver."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    constructor_id: str
    price: Decimal
    points: float = 0.0
    number: int | None = None
