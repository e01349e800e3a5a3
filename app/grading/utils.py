"""
Decimal Utilities
app/grading/utils.py

Provides precision-safe percentage math for grading calculations.
"""

import math
from decimal import Decimal, ROUND_HALF_UP

from app.core.exceptions import EmptyBatchError, InvalidMeasurementError


def clamp(
    value: Decimal,
    min_val: Decimal = Decimal("0"),
    max_val: Decimal = Decimal("100"),
) -> Decimal:
    """Clamp value to range [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def percentage(count: int, total: int, places: int = 2) -> float:
    """
    Share of ``count`` in ``total`` as a percentage rounded half-up.

    Formula: round(count / total × 100, places)
    Raises EmptyBatchError when total is zero.
    """
    if total <= 0:
        raise EmptyBatchError()
    pct = (Decimal(count) * Decimal("100") / Decimal(total)).quantize(
        Decimal(10) ** -places, rounding=ROUND_HALF_UP
    )
    return float(clamp(pct))


def require_measurement(value, field: str) -> float:
    """
    Return ``value`` as a finite, non-negative float.

    Raises InvalidMeasurementError for None, non-numeric, NaN/inf or negative values.
    """
    if value is None or isinstance(value, bool):
        raise InvalidMeasurementError(field, value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidMeasurementError(field, value)
    if not math.isfinite(number):
        raise InvalidMeasurementError(field, value)
    if number < 0:
        raise InvalidMeasurementError(field, value, f"{field} must not be negative, got {value!r}")
    return number
