"""Unit tests for criticality scoring and risk-matrix placement."""

from __future__ import annotations

import pytest

from reliacalc.domain import Asset, CriticalityAssessment
from reliacalc.risk import (
    CriticalityLevel,
    criticality_level,
    matrix_cell_level,
    place_on_risk_matrix,
    rank_by_criticality,
    risk_matrix_cell,
    score_criticality,
)


def _assessment(p: int, env: int, econ: int, human: int) -> CriticalityAssessment:
    return CriticalityAssessment(
        probability=p,
        impact_environment=env,
        impact_economic=econ,
        impact_human=human,
    )


def test_score_uses_unrounded_mean_impact() -> None:
    score = score_criticality(_assessment(4, 2, 3, 3))

    assert score.impact == pytest.approx(8 / 3)
    assert score.score == pytest.approx(32 / 3)
    assert score.level == CriticalityLevel.HIGH


def test_missing_assessment_defaults_to_minimum_risk() -> None:
    score = score_criticality(None)

    assert score.probability == 1
    assert score.impact == 1.0
    assert score.score == 1.0
    assert score.level == CriticalityLevel.LOW
    assert score.matrix_cell == (1, 1)


@pytest.mark.parametrize(
    ("score", "expected"),
    [
        (25.0, CriticalityLevel.CRITICAL),
        (15.01, CriticalityLevel.CRITICAL),
        (15.0, CriticalityLevel.HIGH),
        (10.0, CriticalityLevel.MEDIUM),
        (5.0, CriticalityLevel.LOW),
        (1.0, CriticalityLevel.LOW),
    ],
)
def test_level_boundaries_belong_to_lower_band(score: float, expected: CriticalityLevel) -> None:
    assert criticality_level(score) == expected


def test_score_is_idempotent() -> None:
    assessment = _assessment(3, 5, 4, 2)

    assert score_criticality(assessment) == score_criticality(assessment)


def test_matrix_cell_rounds_mean_impact() -> None:
    score = score_criticality(_assessment(2, 2, 3, 3))
    assert risk_matrix_cell(score) == (2, 3)

    lower = score_criticality(_assessment(5, 1, 2, 1))
    assert risk_matrix_cell(lower) == (5, 1)


def test_matrix_cell_level_bands() -> None:
    assert matrix_cell_level(5, 4) == CriticalityLevel.CRITICAL
    assert matrix_cell_level(3, 5) == CriticalityLevel.HIGH
    assert matrix_cell_level(2, 3) == CriticalityLevel.MEDIUM
    assert matrix_cell_level(1, 5) == CriticalityLevel.LOW
    with pytest.raises(ValueError):
        matrix_cell_level(0, 3)


def test_place_on_risk_matrix_supports_collisions() -> None:
    assets = (
        Asset(id="a", name="A", criticality=_assessment(4, 4, 4, 4)),
        Asset(id="b", name="B", criticality=_assessment(4, 5, 4, 3)),
        Asset(id="c", name="C"),
    )

    cells = place_on_risk_matrix(assets)

    assert len(cells) == 25
    assert cells[(4, 4)] == ("a", "b")
    assert cells[(1, 1)] == ("c",)
    assert cells[(5, 5)] == ()


def test_rank_by_criticality_orders_descending() -> None:
    assets = (
        Asset(id="low", name="Low"),
        Asset(id="high", name="High", criticality=_assessment(5, 5, 5, 5)),
        Asset(id="mid", name="Mid", criticality=_assessment(3, 3, 3, 3)),
    )

    ranked = rank_by_criticality(assets)

    assert [asset.id for asset, _ in ranked] == ["high", "mid", "low"]
    assert ranked[0][1].score == pytest.approx(25.0)


def test_assessment_rejects_out_of_range_rating() -> None:
    with pytest.raises(ValueError, match="probability"):
        _assessment(6, 1, 1, 1)
