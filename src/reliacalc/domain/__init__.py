"""Domain models for monitored assets and reliability assessments."""

from reliacalc.domain.models import (
    Asset,
    AssetStatus,
    CriticalityAssessment,
    DataSource,
    FailureMode,
    Sensor,
    SensorReading,
    SensorType,
    SeverityLevel,
)
from reliacalc.domain.units import coerce_float, finite_or_zero, round_half_up, um_to_mm

__all__ = [
    "Asset",
    "AssetStatus",
    "CriticalityAssessment",
    "DataSource",
    "FailureMode",
    "Sensor",
    "SensorReading",
    "SensorType",
    "SeverityLevel",
    "coerce_float",
    "finite_or_zero",
    "round_half_up",
    "um_to_mm",
]
