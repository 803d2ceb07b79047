"""Criticality scoring, risk-matrix placement, and FMECA."""

from reliacalc.risk.criticality import (
    CriticalityLevel,
    CriticalityScore,
    criticality_level,
    matrix_cell_level,
    place_on_risk_matrix,
    rank_by_criticality,
    risk_matrix_cell,
    score_criticality,
)
from reliacalc.risk.fmeca import (
    FmecaSummary,
    RpnBand,
    clamp_rating,
    fmeca_summary,
    new_failure_mode,
    recompute_failure_mode,
    rpn_band,
    rpn_improvement_percent,
)

__all__ = [
    "CriticalityLevel",
    "CriticalityScore",
    "FmecaSummary",
    "RpnBand",
    "clamp_rating",
    "criticality_level",
    "fmeca_summary",
    "matrix_cell_level",
    "new_failure_mode",
    "place_on_risk_matrix",
    "rank_by_criticality",
    "recompute_failure_mode",
    "risk_matrix_cell",
    "rpn_band",
    "rpn_improvement_percent",
    "score_criticality",
]
