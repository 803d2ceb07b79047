"""CLI front-end for the reliability calculators."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, Sequence

from reliacalc.alignment import AlignmentMeasurement, AlignmentStatus, estimate_alignment_loss
from reliacalc.condition import classify_severity, health_score, status_for_severity
from reliacalc.config import CalculatorConfig, load_calculator_config
from reliacalc.domain import CriticalityAssessment, FailureMode
from reliacalc.risk import recompute_failure_mode, risk_matrix_cell, rpn_band, rpn_improvement_percent, score_criticality
from reliacalc.tolerances import (
    BalanceStatus,
    FitPart,
    ToleranceNotFound,
    default_fit_class,
    evaluate_balance,
    lookup_fit_tolerance,
)

LOGGER = logging.getLogger(__name__)

Handler = Callable[[argparse.Namespace], tuple[dict[str, Any], bool]]


def build_parser() -> argparse.ArgumentParser:
    """Create CLI parser with one subcommand per calculator."""
    parser = argparse.ArgumentParser(
        prog="reliacalc",
        description="Condition classification and engineering calculators for rotating equipment.",
    )
    parser.add_argument("--json", action="store_true", help="Emit the result as a JSON document.")
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="WARNING",
        help="Logging verbosity.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    severity = subparsers.add_parser("severity", help="Classify a vibration reading (ISO zones A-D).")
    severity.add_argument("value", help="Measured value.")
    severity.add_argument("--unit", default="mm/s", choices=("mm/s", "G"), help="Measurement unit.")
    severity.set_defaults(handler=_run_severity)

    tolerance = subparsers.add_parser("tolerance", help="ISO 286 limits of size for a fit class.")
    tolerance.add_argument("diameter", help="Nominal diameter in mm.")
    tolerance.add_argument("--part", choices=[part.value for part in FitPart], default=FitPart.SHAFT.value)
    tolerance.add_argument("--fit", default=None, help="Fit class (defaults to the part's default class).")
    tolerance.set_defaults(handler=_run_tolerance)

    balance = subparsers.add_parser("balance", help="ISO 21940-11 permissible residual unbalance check.")
    balance.add_argument("--mass", required=True, help="Rotor mass in kg.")
    balance.add_argument("--rpm", required=True, help="Service speed in rpm.")
    balance.add_argument("--grade", type=float, default=6.3, help="Balance grade G in mm/s.")
    balance.add_argument("--correction-mass", default="0", help="Measured residual mass in g.")
    balance.add_argument("--correction-radius", default="0", help="Radius of the residual mass in mm.")
    balance.set_defaults(handler=_run_balance)

    alignment = subparsers.add_parser("alignment", help="Misalignment energy-loss estimate.")
    alignment.add_argument("--rpm", required=True, help="Machine speed in rpm.")
    alignment.add_argument("--vertical-offset", required=True, help="Vertical offset in mm.")
    alignment.add_argument("--vertical-angular", required=True, help="Vertical angularity in mm/100 mm.")
    alignment.add_argument("--horizontal-offset", required=True, help="Horizontal offset in mm.")
    alignment.add_argument("--horizontal-angular", required=True, help="Horizontal angularity in mm/100 mm.")
    alignment.add_argument("--config", type=Path, default=None, help="YAML file with operating defaults.")
    alignment.add_argument("--power-kw", type=float, default=None)
    alignment.add_argument("--energy-price", type=float, default=None, help="Price per kWh.")
    alignment.add_argument("--hours", type=float, default=None, help="Operating hours per year.")
    alignment.add_argument("--load-factor", type=float, default=None, help="Load factor in percent.")
    alignment.set_defaults(handler=_run_alignment)

    criticality = subparsers.add_parser("criticality", help="Probability x impact criticality score.")
    criticality.add_argument("probability", type=int)
    criticality.add_argument("impact_environment", type=int)
    criticality.add_argument("impact_economic", type=int)
    criticality.add_argument("impact_human", type=int)
    criticality.set_defaults(handler=_run_criticality)

    fmeca = subparsers.add_parser("fmeca", help="FMECA risk priority number.")
    fmeca.add_argument("severity", type=int)
    fmeca.add_argument("occurrence", type=int)
    fmeca.add_argument("detection", type=int)
    fmeca.add_argument(
        "--residual",
        type=int,
        nargs=3,
        metavar=("S", "O", "D"),
        default=None,
        help="Ratings after the recommended action.",
    )
    fmeca.set_defaults(handler=_run_fmeca)

    return parser


def _run_severity(args: argparse.Namespace) -> tuple[dict[str, Any], bool]:
    severity = classify_severity(args.value, args.unit)
    return (
        {
            "value": args.value,
            "unit": args.unit,
            "severity": severity.value,
            "health_score": health_score(severity),
            "status": status_for_severity(severity).value,
        },
        True,
    )


def _run_tolerance(args: argparse.Namespace) -> tuple[dict[str, Any], bool]:
    fit_class = args.fit if args.fit is not None else default_fit_class(args.part)
    result = lookup_fit_tolerance(args.diameter, fit_class, args.part)
    if isinstance(result, ToleranceNotFound):
        return ({"fit_class": fit_class, "part": args.part, "result": "not_found", "reason": result.reason}, False)
    return (
        {
            "fit_class": result.fit_class,
            "part": result.part.value,
            "nominal_mm": result.nominal_mm,
            "upper_limit_mm": round(result.upper_limit, 4),
            "lower_limit_mm": round(result.lower_limit, 4),
            "tolerance_band_mm": round(result.tolerance_band, 4),
            "upper_deviation_um": result.upper_deviation_um,
            "lower_deviation_um": result.lower_deviation_um,
        },
        True,
    )


def _run_balance(args: argparse.Namespace) -> tuple[dict[str, Any], bool]:
    evaluation = evaluate_balance(
        rotor_mass_kg=args.mass,
        speed_rpm=args.rpm,
        grade_g=args.grade,
        correction_mass_g=args.correction_mass,
        correction_radius_mm=args.correction_radius,
    )
    return (
        {
            "status": evaluation.status.value,
            "specific_unbalance_gmm_per_kg": round(evaluation.specific_unbalance, 2),
            "permissible_unbalance_gmm": round(evaluation.permissible_unbalance, 1),
            "measured_unbalance_gmm": round(evaluation.measured_unbalance, 1),
        },
        evaluation.status != BalanceStatus.INVALID,
    )


def _run_alignment(args: argparse.Namespace) -> tuple[dict[str, Any], bool]:
    config = CalculatorConfig() if args.config is None else load_calculator_config(args.config)
    overrides = {
        "power_kw": args.power_kw,
        "energy_price_per_kwh": args.energy_price,
        "operating_hours_per_year": args.hours,
        "load_factor_percent": args.load_factor,
    }
    params = replace(config.operating, **{key: value for key, value in overrides.items() if value is not None})
    LOGGER.debug("Alignment operating parameters: %s", params)

    measurement = AlignmentMeasurement(
        vertical_offset=args.vertical_offset,
        vertical_angular=args.vertical_angular,
        horizontal_offset=args.horizontal_offset,
        horizontal_angular=args.horizontal_angular,
    )
    estimate = estimate_alignment_loss(measurement, args.rpm, params)
    payload: dict[str, Any] = {
        "status": estimate.status.value,
        "band_rpm": f"{estimate.band.rpm_min:g}-{estimate.band.rpm_max:g}",
        "severity_ratio": round(estimate.severity_ratio, 3),
        "loss_percent": round(estimate.loss_percent, 3),
        "energy_kwh": round(estimate.energy_kwh, 1),
        "annual_cost_savings": round(estimate.annual_cost_savings, 2),
        "co2_saved_tons": round(estimate.co2_saved_tons, 3),
    }
    for name, status in estimate.channel_statuses:
        payload[name] = status.value
    return payload, estimate.status != AlignmentStatus.INVALID


def _run_criticality(args: argparse.Namespace) -> tuple[dict[str, Any], bool]:
    score = score_criticality(
        CriticalityAssessment(
            probability=args.probability,
            impact_environment=args.impact_environment,
            impact_economic=args.impact_economic,
            impact_human=args.impact_human,
        )
    )
    probability_cell, impact_cell = risk_matrix_cell(score)
    return (
        {
            "probability": score.probability,
            "impact": round(score.impact, 3),
            "score": round(score.score, 3),
            "level": score.level.value,
            "matrix_cell": f"{probability_cell},{impact_cell}",
        },
        True,
    )


def _run_fmeca(args: argparse.Namespace) -> tuple[dict[str, Any], bool]:
    residual = args.residual if args.residual is not None else [args.severity, args.occurrence, args.detection]
    mode = recompute_failure_mode(
        FailureMode(
            id="cli",
            severity=args.severity,
            occurrence=args.occurrence,
            detection=args.detection,
            res_severity=residual[0],
            res_occurrence=residual[1],
            res_detection=residual[2],
        )
    )
    payload: dict[str, Any] = {
        "rpn": mode.rpn,
        "band": rpn_band(mode.rpn).value,
        "res_rpn": mode.res_rpn,
        "res_band": rpn_band(mode.res_rpn).value,
    }
    improvement = rpn_improvement_percent(mode.rpn, mode.res_rpn)
    if improvement is not None:
        payload["improvement_percent"] = improvement
    return payload, True


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    handler: Handler = args.handler
    try:
        payload, computed = handler(args)
    except Exception as exc:
        print(f"[ERROR] reliacalc {args.command} failed: {exc}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(payload, indent=2, sort_keys=True))
    else:
        for key, value in payload.items():
            print(f"{key}: {value}")

    if not computed:
        LOGGER.warning("%s result is not computable for the given input", args.command)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
