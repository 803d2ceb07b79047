"""FMECA risk priority numbers, banding, and improvement tracking."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Any, Iterable

from reliacalc.domain.models import FailureMode
from reliacalc.domain.units import coerce_float, round_half_up

RATING_MIN = 1
RATING_MAX = 10

_RATING_FIELDS = (
    "severity",
    "occurrence",
    "detection",
    "res_severity",
    "res_occurrence",
    "res_detection",
)


class RpnBand(StrEnum):
    """Display band for a risk priority number (independent of criticality bands)."""

    ACCEPTABLE = "acceptable"
    ELEVATED = "elevated"
    CRITICAL = "critical"


@dataclass(frozen=True, slots=True)
class FmecaSummary:
    """FMECA sheet ordered by current RPN, with band counts."""

    modes: tuple[FailureMode, ...]
    band_counts: tuple[tuple[str, int], ...]
    max_rpn: int | None
    max_res_rpn: int | None


def clamp_rating(value: Any) -> int:
    """Clamp one rating into [1, 10]; missing or non-numeric ratings become the maximum."""
    number = coerce_float(value)
    if not math.isfinite(number):
        return RATING_MAX
    return int(max(RATING_MIN, min(RATING_MAX, number)))


def recompute_failure_mode(mode: FailureMode) -> FailureMode:
    """Return `mode` with every rating clamped to [1, 10].

    Both RPNs are properties of `FailureMode`, so the returned row always
    reports `rpn == severity * occurrence * detection` (and likewise for the
    residual RPN).
    """
    clamped = {name: clamp_rating(getattr(mode, name)) for name in _RATING_FIELDS}
    return replace(mode, **clamped)


def rpn_band(rpn: int) -> RpnBand:
    """Band an RPN: >200 critical, >100 elevated, else acceptable."""
    if rpn > 200:
        return RpnBand.CRITICAL
    if rpn > 100:
        return RpnBand.ELEVATED
    return RpnBand.ACCEPTABLE


def rpn_improvement_percent(rpn: int, res_rpn: int) -> int | None:
    """Percent reduction from current to residual RPN; `None` without improvement."""
    if rpn <= 0 or res_rpn >= rpn:
        return None
    return round_half_up((rpn - res_rpn) / rpn * 100)


def new_failure_mode(mode_id: str) -> FailureMode:
    """Blank FMECA row with mid-scale ratings (RPN 125)."""
    if not mode_id.strip():
        raise ValueError("mode_id must not be empty")
    return FailureMode(
        id=mode_id,
        component="New component",
        mode="Failure description",
        effect="Consequence",
        cause="Probable cause",
        action="Recommended action",
    )


def fmeca_summary(modes: Iterable[FailureMode]) -> FmecaSummary:
    """Recompute every row and order the sheet by descending RPN."""
    recomputed = [recompute_failure_mode(mode) for mode in modes]
    ordered = tuple(sorted(recomputed, key=lambda mode: mode.rpn, reverse=True))
    counts = {band: 0 for band in RpnBand}
    for mode in ordered:
        counts[rpn_band(mode.rpn)] += 1
    return FmecaSummary(
        modes=ordered,
        band_counts=tuple((band.value, counts[band]) for band in RpnBand),
        max_rpn=ordered[0].rpn if ordered else None,
        max_res_rpn=max((mode.res_rpn for mode in ordered), default=None),
    )
