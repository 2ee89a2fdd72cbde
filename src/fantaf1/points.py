"""Point rounding shared by scoring and storage."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

_ONE_DECIMAL = Decimal("0.1")


def round_points(value: float) -> float:
    """Round to one decimal place, halves away from zero."""
    # repr() keeps the shortest decimal form, so 2.25 stays 2.25 rather than 2.2499...
    rounded = Decimal(repr(value)).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)
    return float(rounded) + 0.0
