"""Core domain models for assets, sensors, and reliability assessments."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from reliacalc.condition.pipeline import AssetCondition


class SeverityLevel(StrEnum):
    """ISO vibration severity zones, ordered from healthy (A) to critical (D)."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"

    @property
    def rank(self) -> int:
        """Position in the worst-of ordering (A lowest, D highest)."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK: dict[SeverityLevel, int] = {
    SeverityLevel.A: 0,
    SeverityLevel.B: 1,
    SeverityLevel.C: 2,
    SeverityLevel.D: 3,
}


class SensorType(StrEnum):
    """Supported measurement modalities."""

    VIBRATION = "vibration"
    TEMPERATURE = "temperature"
    FLOW = "flow"
    PRESSURE = "pressure"
    CURRENT = "current"
    ULTRASOUND = "ultrasound"


class DataSource(StrEnum):
    """How a sensor's readings reach the system."""

    CONTINUOUS = "continuous"
    PERIODIC = "periodic"


class AssetStatus(StrEnum):
    """Operational status shown on asset cards."""

    OPERATIONAL = "operational"
    WARNING = "warning"
    CRITICAL = "critical"
    MAINTENANCE = "maintenance"


@dataclass(frozen=True, slots=True)
class SensorReading:
    """Single timestamped measurement value."""

    timestamp: datetime
    value: float


@dataclass(frozen=True, slots=True)
class Sensor:
    """Measurement point owned by one asset, with its time-ascending history."""

    id: str
    type: SensorType
    unit: str
    threshold_min: float
    threshold_max: float
    data_source: DataSource
    history: tuple[SensorReading, ...] = ()
    label: str = ""

    def __post_init__(self) -> None:
        if not self.id.strip():
            raise ValueError("sensor id must not be empty")
        if self.threshold_min > self.threshold_max:
            raise ValueError("threshold_min cannot be greater than threshold_max")
        for previous, current in zip(self.history, self.history[1:]):
            if current.timestamp < previous.timestamp:
                raise ValueError(f"history for sensor {self.id} must be time-ascending")

    @property
    def current_value(self) -> float | None:
        """Value of the most recent reading, or `None` without history."""
        if not self.history:
            return None
        return self.history[-1].value

    def append(self, reading: SensorReading, *, max_history: int | None = None) -> Sensor:
        """Return a copy with `reading` appended, optionally keeping only the newest entries."""
        if max_history is not None and max_history <= 0:
            raise ValueError("max_history must be > 0 when set")
        history = (*self.history, reading)
        if max_history is not None:
            history = history[-max_history:]
        return replace(self, history=history)

    def with_history(self, history: tuple[SensorReading, ...]) -> Sensor:
        """Return a copy whose history is replaced wholesale."""
        return replace(self, history=tuple(history))


@dataclass(frozen=True, slots=True)
class CriticalityAssessment:
    """Probability and impact ratings (1-5) for one asset."""

    probability: int = 1
    impact_environment: int = 1
    impact_economic: int = 1
    impact_human: int = 1

    def __post_init__(self) -> None:
        for name in ("probability", "impact_environment", "impact_economic", "impact_human"):
            rating = getattr(self, name)
            if rating < 1 or rating > 5:
                raise ValueError(f"{name} must be in [1, 5]")

    @property
    def impacts(self) -> tuple[int, int, int]:
        return (self.impact_environment, self.impact_economic, self.impact_human)


@dataclass(frozen=True, slots=True)
class FailureMode:
    """FMECA row; both risk priority numbers are derived from their ratings."""

    id: str
    component: str = ""
    mode: str = ""
    effect: str = ""
    cause: str = ""
    action: str = ""
    severity: int = 5
    occurrence: int = 5
    detection: int = 5
    res_severity: int = 5
    res_occurrence: int = 5
    res_detection: int = 5

    def __post_init__(self) -> None:
        if not self.id.strip():
            raise ValueError("failure mode id must not be empty")

    @property
    def rpn(self) -> int:
        """Current risk priority number."""
        return self.severity * self.occurrence * self.detection

    @property
    def res_rpn(self) -> int:
        """Residual risk priority number after the recommended action."""
        return self.res_severity * self.res_occurrence * self.res_detection


@dataclass(frozen=True, slots=True)
class Asset:
    """Monitored machine.

    Severity, health score, and status are read-only properties derived from
    the vibration sensors by `reliacalc.condition.pipeline.asset_condition`.
    """

    id: str
    name: str
    location: str = ""
    sensors: tuple[Sensor, ...] = ()
    mtbf: float = 0.0
    mttr: float = 0.0
    criticality: CriticalityAssessment | None = None
    fmeca: tuple[FailureMode, ...] = field(default_factory=tuple)
    maintenance: bool = False

    def __post_init__(self) -> None:
        if not self.id.strip():
            raise ValueError("asset id must not be empty")
        sensor_ids = [sensor.id for sensor in self.sensors]
        if len(sensor_ids) != len(set(sensor_ids)):
            raise ValueError(f"duplicate sensor ids on asset {self.id}")

    def sensors_of_type(self, sensor_type: SensorType) -> tuple[Sensor, ...]:
        """Return sensors of the given modality in declaration order."""
        return tuple(sensor for sensor in self.sensors if sensor.type == sensor_type)

    def get_sensor(self, sensor_id: str) -> Sensor | None:
        """Return sensor by id if present."""
        for sensor in self.sensors:
            if sensor.id == sensor_id:
                return sensor
        return None

    @property
    def severity(self) -> SeverityLevel:
        return self._condition().severity

    @property
    def health_score(self) -> int:
        return self._condition().health_score

    @property
    def status(self) -> AssetStatus:
        return self._condition().status

    def _condition(self) -> AssetCondition:
        from reliacalc.condition.pipeline import asset_condition

        return asset_condition(self)
