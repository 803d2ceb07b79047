"""ISO 286 fit tolerances and ISO 21940-11 balance grades."""

from reliacalc.tolerances.balancing import (
    BALANCE_GRADES,
    BalanceEvaluation,
    BalanceGrade,
    BalanceStatus,
    balance_grade,
    evaluate_balance,
)
from reliacalc.tolerances.iso286 import (
    FIT_CATALOGS,
    FitInterval,
    FitPart,
    ToleranceNotFound,
    ToleranceResult,
    default_fit_class,
    fit_classes,
    lookup_fit_tolerance,
)

__all__ = [
    "BALANCE_GRADES",
    "BalanceEvaluation",
    "BalanceGrade",
    "BalanceStatus",
    "FIT_CATALOGS",
    "FitInterval",
    "FitPart",
    "ToleranceNotFound",
    "ToleranceResult",
    "balance_grade",
    "default_fit_class",
    "evaluate_balance",
    "fit_classes",
    "lookup_fit_tolerance",
]
