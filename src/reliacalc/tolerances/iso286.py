"""ISO 286-2 shaft and housing fit tolerances by nominal diameter."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from reliacalc.domain.units import coerce_float, um_to_mm

# Nominal sizes below this are outside the supported range of the catalogs.
MIN_NOMINAL_DIAMETER_MM = 1.0


class FitPart(StrEnum):
    """Which side of the fit a tolerance class applies to."""

    SHAFT = "shaft"
    HOUSING = "housing"


@dataclass(frozen=True, slots=True)
class FitInterval:
    """Deviations for nominal diameters in the half-open range `(min_mm, max_mm]`."""

    min_mm: float
    max_mm: float
    upper_um: int
    lower_um: int

    def __post_init__(self) -> None:
        if self.min_mm >= self.max_mm:
            raise ValueError("min_mm must be < max_mm")
        if self.lower_um > self.upper_um:
            raise ValueError("lower_um cannot be greater than upper_um")

    def contains(self, diameter_mm: float) -> bool:
        return self.min_mm < diameter_mm <= self.max_mm


@dataclass(frozen=True, slots=True)
class ToleranceResult:
    """Limits of size for one nominal diameter and fit class, in millimetres."""

    nominal_mm: float
    fit_class: str
    part: FitPart
    upper_limit: float
    lower_limit: float
    tolerance_band: float
    upper_deviation_um: int
    lower_deviation_um: int

    @property
    def upper_deviation_mm(self) -> float:
        return um_to_mm(self.upper_deviation_um)

    @property
    def lower_deviation_mm(self) -> float:
        return um_to_mm(self.lower_deviation_um)


@dataclass(frozen=True, slots=True)
class ToleranceNotFound:
    """Explicit miss: the input cannot be resolved against the catalogs."""

    reason: str
    fit_class: str
    part: str


def _intervals(*rows: tuple[float, float, int, int]) -> tuple[FitInterval, ...]:
    return tuple(FitInterval(*row) for row in rows)


SHAFT_FITS: dict[str, tuple[FitInterval, ...]] = {
    "h6": _intervals((18, 30, 0, -13), (30, 50, 0, -16), (50, 80, 0, -19), (80, 120, 0, -22)),
    "j6": _intervals((18, 30, 9, -4), (30, 50, 11, -5), (50, 80, 12, -7), (80, 120, 13, -9)),
    "k6": _intervals((18, 30, 15, 2), (30, 50, 18, 2), (50, 80, 21, 2), (80, 120, 25, 3)),
    "m6": _intervals((18, 30, 21, 8), (30, 50, 25, 9), (50, 80, 30, 11), (80, 120, 35, 13)),
    "n6": _intervals((18, 30, 28, 15), (30, 50, 33, 17), (50, 80, 39, 20), (80, 120, 45, 23)),
}

HOUSING_FITS: dict[str, tuple[FitInterval, ...]] = {
    "H7": _intervals(
        (18, 30, 21, 0), (30, 50, 25, 0), (50, 80, 30, 0), (80, 120, 35, 0), (120, 180, 40, 0)
    ),
    "J7": _intervals((18, 30, 12, -9), (30, 50, 14, -11), (50, 80, 18, -12), (80, 120, 22, -13)),
    "K7": _intervals((18, 30, 2, -19), (30, 50, 2, -23), (50, 80, 2, -28), (80, 120, 3, -32)),
    "M7": _intervals((18, 30, -1, -22), (30, 50, -2, -27), (50, 80, -3, -33), (80, 120, -3, -38)),
    "P7": _intervals((18, 30, -11, -32), (30, 50, -14, -39), (50, 80, -17, -47), (80, 120, -20, -55)),
}

FIT_CATALOGS: dict[FitPart, dict[str, tuple[FitInterval, ...]]] = {
    FitPart.SHAFT: SHAFT_FITS,
    FitPart.HOUSING: HOUSING_FITS,
}

_DEFAULT_FIT_CLASS: dict[FitPart, str] = {
    FitPart.SHAFT: "k6",
    FitPart.HOUSING: "H7",
}


def fit_classes(part: FitPart | str) -> tuple[str, ...]:
    """Fit classes available for `part`, in catalog order."""
    return tuple(FIT_CATALOGS[FitPart(part)])


def default_fit_class(part: FitPart | str) -> str:
    """Fit class selected when switching to the `part` catalog."""
    return _DEFAULT_FIT_CLASS[FitPart(part)]


def lookup_fit_tolerance(
    nominal_diameter: Any,
    fit_class: str,
    part: FitPart | str,
) -> ToleranceResult | ToleranceNotFound:
    """Resolve limits of size for `nominal_diameter` (mm).

    The first interval with `min < D <= max` wins, so a diameter equal to the
    lowest tabulated bound (18 mm) is not found.
    """
    try:
        resolved_part = FitPart(part)
    except ValueError:
        return ToleranceNotFound(reason=f"unknown part: {part}", fit_class=fit_class, part=str(part))

    table = FIT_CATALOGS[resolved_part].get(fit_class)
    if table is None:
        return ToleranceNotFound(
            reason=f"unknown {resolved_part.value} fit class: {fit_class}",
            fit_class=fit_class,
            part=resolved_part.value,
        )

    diameter = coerce_float(nominal_diameter)
    if not math.isfinite(diameter) or diameter < MIN_NOMINAL_DIAMETER_MM:
        return ToleranceNotFound(
            reason=f"nominal diameter not calculable: {nominal_diameter!r}",
            fit_class=fit_class,
            part=resolved_part.value,
        )

    for interval in table:
        if interval.contains(diameter):
            upper_mm = um_to_mm(interval.upper_um)
            lower_mm = um_to_mm(interval.lower_um)
            return ToleranceResult(
                nominal_mm=diameter,
                fit_class=fit_class,
                part=resolved_part,
                upper_limit=diameter + upper_mm,
                lower_limit=diameter + lower_mm,
                tolerance_band=upper_mm - lower_mm,
                upper_deviation_um=interval.upper_um,
                lower_deviation_um=interval.lower_um,
            )

    return ToleranceNotFound(
        reason=f"{diameter} mm outside tabulated range for {fit_class}",
        fit_class=fit_class,
        part=resolved_part.value,
    )


def _validate_catalogs() -> None:
    for part, catalog in FIT_CATALOGS.items():
        for fit_class, table in catalog.items():
            if not table:
                raise ValueError(f"{part.value} fit class {fit_class} has no intervals")
            for previous, current in zip(table, table[1:]):
                if previous.max_mm != current.min_mm:
                    raise ValueError(f"{part.value} fit class {fit_class} intervals are not contiguous")


_validate_catalogs()
