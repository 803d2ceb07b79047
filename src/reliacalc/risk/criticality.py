"""Criticality scoring and 5x5 risk-matrix placement."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Iterable, Sequence

from reliacalc.domain.models import Asset, CriticalityAssessment
from reliacalc.domain.units import round_half_up

MATRIX_SIZE = 5


class CriticalityLevel(StrEnum):
    """Criticality bands on the 1-25 probability x impact scale."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


@dataclass(frozen=True, slots=True)
class CriticalityScore:
    """Scored assessment; `impact` is the unrounded mean of the three impacts."""

    probability: int
    impact: float
    score: float
    level: CriticalityLevel

    @property
    def matrix_cell(self) -> tuple[int, int]:
        return risk_matrix_cell(self)


def criticality_level(score: float) -> CriticalityLevel:
    """Band a probability x impact score; boundaries belong to the lower band."""
    if score > 15:
        return CriticalityLevel.CRITICAL
    if score > 10:
        return CriticalityLevel.HIGH
    if score > 5:
        return CriticalityLevel.MEDIUM
    return CriticalityLevel.LOW


def score_criticality(assessment: CriticalityAssessment | None) -> CriticalityScore:
    """Score an assessment; a missing assessment scores as minimum risk."""
    resolved = CriticalityAssessment() if assessment is None else assessment
    impact = sum(resolved.impacts) / 3
    score = resolved.probability * impact
    return CriticalityScore(
        probability=resolved.probability,
        impact=impact,
        score=score,
        level=criticality_level(score),
    )


def risk_matrix_cell(score: CriticalityScore) -> tuple[int, int]:
    """Integer `(probability, impact)` grid coordinate in [1, 5] x [1, 5]."""
    return (
        _clamp_to_grid(round_half_up(score.probability)),
        _clamp_to_grid(round_half_up(score.impact)),
    )


def matrix_cell_level(probability: int, impact: int) -> CriticalityLevel:
    """Background band of one grid cell, from the product of its coordinates."""
    if not (1 <= probability <= MATRIX_SIZE and 1 <= impact <= MATRIX_SIZE):
        raise ValueError("matrix coordinates must be in [1, 5]")
    return criticality_level(probability * impact)


def place_on_risk_matrix(assets: Iterable[Asset]) -> dict[tuple[int, int], tuple[str, ...]]:
    """Group asset ids by grid cell; every one of the 25 cells is present."""
    cells: dict[tuple[int, int], list[str]] = {
        (probability, impact): []
        for probability in range(1, MATRIX_SIZE + 1)
        for impact in range(1, MATRIX_SIZE + 1)
    }
    for asset in assets:
        cell = risk_matrix_cell(score_criticality(asset.criticality))
        cells[cell].append(asset.id)
    return {cell: tuple(asset_ids) for cell, asset_ids in cells.items()}


def rank_by_criticality(assets: Sequence[Asset]) -> tuple[tuple[Asset, CriticalityScore], ...]:
    """Assets with their scores, highest score first (ties keep input order)."""
    scored = [(asset, score_criticality(asset.criticality)) for asset in assets]
    return tuple(sorted(scored, key=lambda pair: pair[1].score, reverse=True))


def _clamp_to_grid(value: int) -> int:
    return max(1, min(MATRIX_SIZE, value))
