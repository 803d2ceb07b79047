"""Numeric coercion and rounding helpers shared by the calculators."""

from __future__ import annotations

import math
from typing import Any


def coerce_float(value: Any) -> float:
    """Convert user or telemetry input to float, returning NaN when not numeric."""
    if isinstance(value, bool) or value is None:
        return math.nan
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def finite_or_zero(value: Any) -> float:
    """Coerce to float, collapsing NaN/inf/non-numeric input to 0.0."""
    number = coerce_float(value)
    if not math.isfinite(number):
        return 0.0
    return number


def round_half_up(value: float) -> int:
    """Round to nearest integer with .5 going towards +inf."""
    return int(math.floor(value + 0.5))


def um_to_mm(value_um: float) -> float:
    """Convert micrometres to millimetres."""
    return value_um / 1000.0
