"""Shaft alignment tolerances and misalignment energy-loss model."""

from reliacalc.alignment.loss_model import (
    ALIGNMENT_TOLERANCE_BANDS,
    AlignmentLossEstimate,
    AlignmentMeasurement,
    AlignmentStatus,
    AlignmentToleranceBand,
    ChannelKind,
    OperatingParameters,
    classify_channel,
    estimate_alignment_loss,
    loss_fraction_for_ratio,
    select_tolerance_band,
)

__all__ = [
    "ALIGNMENT_TOLERANCE_BANDS",
    "AlignmentLossEstimate",
    "AlignmentMeasurement",
    "AlignmentStatus",
    "AlignmentToleranceBand",
    "ChannelKind",
    "OperatingParameters",
    "classify_channel",
    "estimate_alignment_loss",
    "loss_fraction_for_ratio",
    "select_tolerance_band",
]
