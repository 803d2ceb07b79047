"""ISO 21940-11 permissible residual unbalance for rigid rotors."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from reliacalc.domain.units import coerce_float, finite_or_zero

# eper [g*mm/kg] = 1000 * G [mm/s] / omega [rad/s] = 9549 * G / n [rpm]
SPECIFIC_UNBALANCE_FACTOR = 9549.0


class BalanceStatus(StrEnum):
    """Outcome of comparing measured against permissible unbalance."""

    COMPLIANT = "compliant"
    NON_COMPLIANT = "non-compliant"
    INVALID = "invalid"


@dataclass(frozen=True, slots=True)
class BalanceGrade:
    """One balance quality grade and its typical applications."""

    label: str
    g: float
    description: str


BALANCE_GRADES: tuple[BalanceGrade, ...] = (
    BalanceGrade("G0.4", 0.4, "High-precision spindles, discs and armatures."),
    BalanceGrade("G1", 1.0, "Small electric motors, tape recorder drives."),
    BalanceGrade("G2.5", 2.5, "Gas and steam turbines, turbo-compressors."),
    BalanceGrade("G6.3", 6.3, "General machinery parts, pumps, fans."),
    BalanceGrade("G16", 16.0, "Agricultural machinery, belt pulleys."),
    BalanceGrade("G40", 40.0, "Car wheels and rims."),
)


@dataclass(frozen=True, slots=True)
class BalanceEvaluation:
    """Permissible versus measured residual unbalance."""

    status: BalanceStatus
    specific_unbalance: float
    permissible_unbalance: float
    measured_unbalance: float

    @property
    def utilization(self) -> float | None:
        """Measured over permissible unbalance, `None` when not computable."""
        if self.status == BalanceStatus.INVALID or self.permissible_unbalance <= 0.0:
            return None
        return self.measured_unbalance / self.permissible_unbalance


def balance_grade(label: str) -> BalanceGrade:
    """Look up a catalog grade by label (e.g. `"G6.3"`)."""
    for grade in BALANCE_GRADES:
        if grade.label.lower() == label.strip().lower():
            return grade
    raise KeyError(f"unknown balance grade: {label}")


def evaluate_balance(
    *,
    rotor_mass_kg: Any,
    speed_rpm: Any,
    grade_g: Any,
    correction_mass_g: Any,
    correction_radius_mm: Any,
) -> BalanceEvaluation:
    """Check a measured residual unbalance against the grade's permissible value.

    Rotor mass and speed must be positive finite numbers; otherwise the result
    is `INVALID` with zeroed figures.
    """
    mass = coerce_float(rotor_mass_kg)
    speed = coerce_float(speed_rpm)
    grade = coerce_float(grade_g)
    if not (_positive(mass) and _positive(speed) and _positive(grade)):
        return BalanceEvaluation(
            status=BalanceStatus.INVALID,
            specific_unbalance=0.0,
            permissible_unbalance=0.0,
            measured_unbalance=0.0,
        )

    specific = SPECIFIC_UNBALANCE_FACTOR * grade / speed
    permissible = specific * mass
    measured = finite_or_zero(correction_mass_g) * finite_or_zero(correction_radius_mm)

    status = BalanceStatus.COMPLIANT if measured <= permissible else BalanceStatus.NON_COMPLIANT
    return BalanceEvaluation(
        status=status,
        specific_unbalance=specific,
        permissible_unbalance=permissible,
        measured_unbalance=measured,
    )


def _positive(value: float) -> bool:
    return math.isfinite(value) and value > 0.0
