"""Shaft misalignment tolerance check and parasitic energy-loss estimate."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

import numpy as np

from reliacalc.domain.units import coerce_float, finite_or_zero

LOSS_SLOPE_PER_RATIO = 0.015
MAX_LOSS_FRACTION = 0.10
CO2_KG_PER_KWH = 0.4
ACCEPTABLE_LOSS_PERCENT = 3.0


class ChannelKind(StrEnum):
    """Misalignment component measured on one channel."""

    OFFSET = "offset"
    ANGULAR = "angular"


class AlignmentStatus(StrEnum):
    """Classification of a channel or a whole alignment job."""

    EXCELLENT = "excellent"
    ACCEPTABLE = "acceptable"
    CRITICAL = "critical"
    INVALID = "invalid"


@dataclass(frozen=True, slots=True)
class AlignmentToleranceBand:
    """Offset (mm) and angularity (mm/100 mm) limits for a speed range `[rpm_min, rpm_max)`."""

    rpm_min: float
    rpm_max: float
    offset_excellent: float
    offset_acceptable: float
    angular_excellent: float
    angular_acceptable: float

    def __post_init__(self) -> None:
        if self.rpm_min >= self.rpm_max:
            raise ValueError("rpm_min must be < rpm_max")
        if self.offset_excellent > self.offset_acceptable:
            raise ValueError("offset_excellent cannot exceed offset_acceptable")
        if self.angular_excellent > self.angular_acceptable:
            raise ValueError("angular_excellent cannot exceed angular_acceptable")

    def limits(self, kind: ChannelKind) -> tuple[float, float]:
        """`(excellent, acceptable)` limits for a channel kind."""
        if kind == ChannelKind.OFFSET:
            return (self.offset_excellent, self.offset_acceptable)
        return (self.angular_excellent, self.angular_acceptable)


ALIGNMENT_TOLERANCE_BANDS: tuple[AlignmentToleranceBand, ...] = (
    AlignmentToleranceBand(0, 1000, 0.08, 0.13, 0.06, 0.10),
    AlignmentToleranceBand(1000, 2000, 0.05, 0.08, 0.04, 0.07),
    AlignmentToleranceBand(2000, 3000, 0.04, 0.06, 0.03, 0.05),
    AlignmentToleranceBand(3000, 10000, 0.03, 0.04, 0.02, 0.03),
)

# Used when the speed is missing or below the table.
DEFAULT_BAND_INDEX = 1


@dataclass(frozen=True, slots=True)
class AlignmentMeasurement:
    """Laser alignment readings: offsets in mm, angularities in mm/100 mm."""

    vertical_offset: Any
    vertical_angular: Any
    horizontal_offset: Any
    horizontal_angular: Any

    def channels(self) -> tuple[tuple[str, ChannelKind, float], ...]:
        """`(name, kind, value)` for the four channels in fixed order."""
        return (
            ("vertical_offset", ChannelKind.OFFSET, coerce_float(self.vertical_offset)),
            ("vertical_angular", ChannelKind.ANGULAR, coerce_float(self.vertical_angular)),
            ("horizontal_offset", ChannelKind.OFFSET, coerce_float(self.horizontal_offset)),
            ("horizontal_angular", ChannelKind.ANGULAR, coerce_float(self.horizontal_angular)),
        )


@dataclass(frozen=True, slots=True)
class OperatingParameters:
    """Drive economics used to price the misalignment loss."""

    power_kw: float = 75.0
    energy_price_per_kwh: float = 0.18
    operating_hours_per_year: float = 8000.0
    load_factor_percent: float = 85.0


@dataclass(frozen=True, slots=True)
class AlignmentLossEstimate:
    """Estimated loss and savings potential for one alignment job.

    `loss_percent` is in percent (0-10); `loss_fraction` is the same value in
    [0, 0.10].
    """

    status: AlignmentStatus
    band: AlignmentToleranceBand
    severity_ratio: float
    loss_fraction: float
    loss_percent: float
    annual_consumption_kwh: float
    energy_kwh: float
    annual_cost_savings: float
    co2_saved_tons: float
    channel_statuses: tuple[tuple[str, AlignmentStatus], ...]


def select_tolerance_band(rpm: Any) -> AlignmentToleranceBand:
    """Pick the band with `rpm_min <= n < rpm_max`.

    Speeds at or above the top band's ceiling use the top band; missing or
    negative speeds use the 1000-2000 rpm band.
    """
    speed = coerce_float(rpm)
    if math.isnan(speed) or speed < ALIGNMENT_TOLERANCE_BANDS[0].rpm_min:
        return ALIGNMENT_TOLERANCE_BANDS[DEFAULT_BAND_INDEX]
    for band in ALIGNMENT_TOLERANCE_BANDS:
        if band.rpm_min <= speed < band.rpm_max:
            return band
    return ALIGNMENT_TOLERANCE_BANDS[-1]


def classify_channel(value: Any, kind: ChannelKind, band: AlignmentToleranceBand) -> AlignmentStatus:
    """Classify one reading's magnitude against the band's limits (inclusive)."""
    magnitude = abs(coerce_float(value))
    if not math.isfinite(magnitude):
        return AlignmentStatus.INVALID
    excellent, acceptable = band.limits(kind)
    if magnitude <= excellent:
        return AlignmentStatus.EXCELLENT
    if magnitude <= acceptable:
        return AlignmentStatus.ACCEPTABLE
    return AlignmentStatus.CRITICAL


def loss_fraction_for_ratio(severity_ratio: float) -> float:
    """Linear loss above ratio 1 (1.5 % per unit), capped at 10 %."""
    return min(MAX_LOSS_FRACTION, max(0.0, (severity_ratio - 1.0) * LOSS_SLOPE_PER_RATIO))


def estimate_alignment_loss(
    measurement: AlignmentMeasurement,
    rpm: Any,
    params: OperatingParameters | None = None,
) -> AlignmentLossEstimate:
    """Estimate energy loss from the worst channel's ratio to its excellent limit."""
    resolved = OperatingParameters() if params is None else params
    band = select_tolerance_band(rpm)
    channels = measurement.channels()
    channel_statuses = tuple((name, classify_channel(value, kind, band)) for name, kind, value in channels)

    magnitudes = np.abs(np.asarray([value for _, _, value in channels], dtype=np.float64))
    if not np.all(np.isfinite(magnitudes)):
        return AlignmentLossEstimate(
            status=AlignmentStatus.INVALID,
            band=band,
            severity_ratio=0.0,
            loss_fraction=0.0,
            loss_percent=0.0,
            annual_consumption_kwh=0.0,
            energy_kwh=0.0,
            annual_cost_savings=0.0,
            co2_saved_tons=0.0,
            channel_statuses=channel_statuses,
        )

    limits = np.asarray([band.limits(kind)[0] for _, kind, _ in channels], dtype=np.float64)
    severity_ratio = float(np.max(magnitudes / limits))
    loss_fraction = loss_fraction_for_ratio(severity_ratio)

    annual_consumption_kwh = (
        finite_or_zero(resolved.power_kw)
        * finite_or_zero(resolved.operating_hours_per_year)
        * (finite_or_zero(resolved.load_factor_percent) / 100.0)
    )
    energy_kwh = annual_consumption_kwh * loss_fraction
    annual_cost_savings = energy_kwh * finite_or_zero(resolved.energy_price_per_kwh)
    co2_saved_tons = energy_kwh * CO2_KG_PER_KWH / 1000.0
    loss_percent = loss_fraction * 100.0

    if severity_ratio <= 1.0:
        status = AlignmentStatus.EXCELLENT
    elif loss_percent < ACCEPTABLE_LOSS_PERCENT:
        status = AlignmentStatus.ACCEPTABLE
    else:
        status = AlignmentStatus.CRITICAL

    return AlignmentLossEstimate(
        status=status,
        band=band,
        severity_ratio=severity_ratio,
        loss_fraction=loss_fraction,
        loss_percent=loss_percent,
        annual_consumption_kwh=annual_consumption_kwh,
        energy_kwh=energy_kwh,
        annual_cost_savings=annual_cost_savings,
        co2_saved_tons=co2_saved_tons,
        channel_statuses=channel_statuses,
    )
