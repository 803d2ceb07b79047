"""Vibration severity classification and derived health scoring."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable

from reliacalc.domain.models import AssetStatus, SeverityLevel
from reliacalc.domain.units import coerce_float

ACCELERATION_UNIT = "G"
VELOCITY_UNIT = "mm/s"


@dataclass(frozen=True, slots=True)
class SeverityLadder:
    """Alert and critical boundaries for one measurement unit."""

    unit: str
    alert: float
    critical: float
    inclusive: bool


# Velocity boundaries pass on equality, acceleration boundaries fail on equality.
VELOCITY_LADDER = SeverityLadder(unit=VELOCITY_UNIT, alert=2.8, critical=4.5, inclusive=True)
ACCELERATION_LADDER = SeverityLadder(unit=ACCELERATION_UNIT, alert=1.5, critical=3.0, inclusive=False)

_HEALTH_SCORES: dict[SeverityLevel, int] = {
    SeverityLevel.A: 100,
    SeverityLevel.B: 100,
    SeverityLevel.C: 55,
    SeverityLevel.D: 15,
}


def ladder_for_unit(unit: str) -> SeverityLadder:
    """Return the threshold ladder used for `unit` (velocity unless `G`)."""
    if unit == ACCELERATION_UNIT:
        return ACCELERATION_LADDER
    return VELOCITY_LADDER


def classify_severity(value: Any, unit: str) -> SeverityLevel:
    """Map one vibration reading to severity A, C, or D.

    Unclassifiable input (non-numeric, NaN, infinite) is reported as D.
    """
    number = coerce_float(value)
    if not math.isfinite(number):
        return SeverityLevel.D

    ladder = ladder_for_unit(unit)
    if ladder.inclusive:
        if number <= ladder.alert:
            return SeverityLevel.A
        if number <= ladder.critical:
            return SeverityLevel.C
        return SeverityLevel.D

    if number < ladder.alert:
        return SeverityLevel.A
    if number < ladder.critical:
        return SeverityLevel.C
    return SeverityLevel.D


def health_score(severity: SeverityLevel | str) -> int:
    """Fixed health percentage for a severity code; unknown codes score 100."""
    try:
        level = SeverityLevel(severity)
    except ValueError:
        return 100
    return _HEALTH_SCORES[level]


def worst_severity(levels: Iterable[SeverityLevel]) -> SeverityLevel:
    """Aggregate per-sensor severities into the asset-level worst case."""
    worst = SeverityLevel.A
    for level in levels:
        if level == SeverityLevel.D:
            return SeverityLevel.D
        if level.rank > worst.rank:
            worst = level
    return worst


def status_for_severity(severity: SeverityLevel) -> AssetStatus:
    """Asset card status implied by a severity code."""
    if severity == SeverityLevel.D:
        return AssetStatus.CRITICAL
    if severity == SeverityLevel.C:
        return AssetStatus.WARNING
    return AssetStatus.OPERATIONAL
