"""Runtime policies for the asset condition pipeline and alert throttling."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PipelinePolicy:
    """Limits applied when live or imported readings update an asset."""

    live_history_limit: int = 40
    velocity_alarm_max: float = 4.5
    acceleration_alarm_max: float = 3.0

    def __post_init__(self) -> None:
        if self.live_history_limit <= 0:
            raise ValueError("live_history_limit must be > 0")
        if self.velocity_alarm_max <= 0.0:
            raise ValueError("velocity_alarm_max must be > 0")
        if self.acceleration_alarm_max <= 0.0:
            raise ValueError("acceleration_alarm_max must be > 0")

    def alarm_max_for_unit(self, unit: str) -> float:
        """Alarm ceiling assigned to new vibration sensors of `unit`."""
        if unit == "G":
            return self.acceleration_alarm_max
        return self.velocity_alarm_max


@dataclass(frozen=True, slots=True)
class AlertPolicy:
    """Minimum spacing between two notifications for the same asset."""

    window_seconds: float = 300.0

    def __post_init__(self) -> None:
        if self.window_seconds < 0.0:
            raise ValueError("window_seconds must be >= 0")
