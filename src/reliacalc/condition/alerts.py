"""Alarm candidate selection and per-asset notification throttling."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta

from reliacalc.config.policies import AlertPolicy
from reliacalc.domain.models import Asset


@dataclass(frozen=True, slots=True)
class AlertCandidate:
    """Sensor whose latest value exceeds its alarm ceiling."""

    asset_id: str
    sensor_id: str
    value: float
    threshold_max: float
    unit: str

    @property
    def exceedance_ratio(self) -> float:
        if not math.isfinite(self.value) or self.threshold_max <= 0.0:
            return float("inf")
        return self.value / self.threshold_max


def alert_candidates(asset: Asset) -> tuple[AlertCandidate, ...]:
    """Return sensors above `threshold_max`, worst exceedance first.

    A latest value that is not finite counts as an exceedance.
    """
    candidates: list[AlertCandidate] = []
    for sensor in asset.sensors:
        value = sensor.current_value
        if value is None:
            continue
        if math.isfinite(value) and not value > sensor.threshold_max:
            continue
        candidates.append(
            AlertCandidate(
                asset_id=asset.id,
                sensor_id=sensor.id,
                value=value,
                threshold_max=sensor.threshold_max,
                unit=sensor.unit,
            )
        )
    return tuple(sorted(candidates, key=lambda item: item.exceedance_ratio, reverse=True))


class AlertThrottle:
    """Suppress repeat notifications for the same asset inside a time window."""

    def __init__(self, policy: AlertPolicy | None = None) -> None:
        resolved = AlertPolicy() if policy is None else policy
        self._window = timedelta(seconds=resolved.window_seconds)
        self._last_notified: dict[str, datetime] = {}

    def should_notify(self, asset_id: str, now: datetime) -> bool:
        """Whether a notification for `asset_id` may be sent at `now`."""
        last = self._last_notified.get(asset_id)
        if last is None:
            return True
        return now - last >= self._window

    def record(self, asset_id: str, now: datetime) -> None:
        """Remember that a notification for `asset_id` was sent at `now`."""
        self._last_notified[asset_id] = now

    def try_acquire(self, asset_id: str, now: datetime) -> bool:
        """Check and record in one step; returns `False` when throttled."""
        if not self.should_notify(asset_id, now):
            return False
        self.record(asset_id, now)
        return True

    def last_notified(self, asset_id: str) -> datetime | None:
        return self._last_notified.get(asset_id)

    def reset(self) -> None:
        """Forget all notification history."""
        self._last_notified.clear()
