"""Unit tests for FMECA risk priority numbers."""

from __future__ import annotations

from dataclasses import replace

import pytest

from reliacalc.domain import FailureMode
from reliacalc.risk import (
    RpnBand,
    fmeca_summary,
    new_failure_mode,
    recompute_failure_mode,
    rpn_band,
    rpn_improvement_percent,
)


def _mode(s: int, o: int, d: int, *, res: tuple[int, int, int] = (1, 1, 1), mode_id: str = "fm-1") -> FailureMode:
    return FailureMode(
        id=mode_id,
        severity=s,
        occurrence=o,
        detection=d,
        res_severity=res[0],
        res_occurrence=res[1],
        res_detection=res[2],
    )


def test_rpn_equals_product_for_all_ratings() -> None:
    for s in range(1, 11):
        for o in range(1, 11):
            for d in (1, 5, 10):
                mode = recompute_failure_mode(_mode(s, o, d))
                assert mode.rpn == s * o * d


def test_rpn_follows_rating_mutation() -> None:
    mode = recompute_failure_mode(_mode(6, 4, 5, res=(6, 2, 3)))
    assert mode.rpn == 120
    assert mode.res_rpn == 36

    mutated = recompute_failure_mode(replace(mode, occurrence=9, res_detection=1))

    assert mutated.rpn == 6 * 9 * 5
    assert mutated.res_rpn == 6 * 2 * 1


def test_recompute_clamps_ratings() -> None:
    mode = recompute_failure_mode(_mode(12, 0, -3, res=(11, 5, 10)))

    assert (mode.severity, mode.occurrence, mode.detection) == (10, 1, 1)
    assert mode.rpn == 10
    assert mode.res_severity == 10
    assert mode.res_rpn == 500


def test_recompute_treats_unreadable_ratings_as_worst_case() -> None:
    mode = recompute_failure_mode(
        FailureMode(id="fm-2", severity=float("nan"), occurrence=None, detection="abc", res_detection="3")
    )

    assert (mode.severity, mode.occurrence, mode.detection) == (10, 10, 10)
    assert mode.rpn == 1000
    assert mode.res_detection == 3
    assert mode.res_rpn == 75


def test_failure_mode_requires_id() -> None:
    with pytest.raises(ValueError, match="failure mode id"):
        FailureMode(id=" ")


@pytest.mark.parametrize(
    ("rpn", "expected"),
    [
        (1000, RpnBand.CRITICAL),
        (201, RpnBand.CRITICAL),
        (200, RpnBand.ELEVATED),
        (101, RpnBand.ELEVATED),
        (100, RpnBand.ACCEPTABLE),
        (1, RpnBand.ACCEPTABLE),
    ],
)
def test_rpn_band_thresholds(rpn: int, expected: RpnBand) -> None:
    assert rpn_band(rpn) == expected


def test_improvement_percent() -> None:
    assert rpn_improvement_percent(240, 60) == 75
    assert rpn_improvement_percent(125, 36) == 71
    assert rpn_improvement_percent(100, 100) is None
    assert rpn_improvement_percent(80, 120) is None


def test_new_failure_mode_defaults() -> None:
    mode = new_failure_mode("fm-42")

    assert mode.rpn == 125
    assert mode.res_rpn == 125
    with pytest.raises(ValueError):
        new_failure_mode("  ")


def test_summary_orders_by_rpn_and_counts_bands() -> None:
    summary = fmeca_summary(
        (
            _mode(2, 2, 2, mode_id="low"),
            _mode(9, 8, 7, res=(9, 2, 2), mode_id="top"),
            _mode(5, 5, 5, mode_id="mid"),
        )
    )

    assert [mode.id for mode in summary.modes] == ["top", "mid", "low"]
    assert dict(summary.band_counts) == {"acceptable": 1, "elevated": 1, "critical": 1}
    assert summary.max_rpn == 504
    assert summary.max_res_rpn == 36


def test_summary_of_empty_sheet() -> None:
    summary = fmeca_summary(())

    assert summary.modes == ()
    assert summary.max_rpn is None
    assert summary.max_res_rpn is None
