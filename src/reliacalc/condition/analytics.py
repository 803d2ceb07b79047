"""Condition analytics over sensor history: z-score anomalies, immediate risk, and asset clusters."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Sequence

import numpy as np

from reliacalc.domain.models import Asset, Sensor, SensorReading, SensorType


@dataclass(frozen=True, slots=True)
class AnomalyPolicy:
    """Z-score threshold and the minimum history needed before scoring."""

    z_threshold: float = 2.5
    min_readings: int = 5

    def __post_init__(self) -> None:
        if self.z_threshold <= 0.0:
            raise ValueError("z_threshold must be > 0")
        if self.min_readings < 2:
            raise ValueError("min_readings must be >= 2")


@dataclass(frozen=True, slots=True)
class AnomalyPoint:
    """One reading with its absolute z-score."""

    timestamp: datetime
    value: float
    score: float
    is_anomaly: bool


class AssetCluster(StrEnum):
    """Health/MTBF bucket used on the fleet scatter plot."""

    CRITICAL_RISK = "critical_risk"
    SILENT_DEGRADATION = "silent_degradation"
    ELITE = "elite"
    STABLE = "stable"


@dataclass(frozen=True, slots=True)
class AssetClusterPoint:
    asset_id: str
    health_score: int
    mtbf: float
    cluster: AssetCluster


def score_anomalies(
    history: Sequence[SensorReading],
    *,
    policy: AnomalyPolicy | None = None,
) -> tuple[AnomalyPoint, ...]:
    """Score each reading by `|value - mean| / std` over the history.

    Uses the population standard deviation; a zero spread falls back to 1.
    Histories shorter than `policy.min_readings` score 0 everywhere. Readings
    that are not finite are left out of the statistics and always flagged.
    """
    resolved = AnomalyPolicy() if policy is None else policy
    if len(history) < resolved.min_readings:
        return tuple(
            AnomalyPoint(timestamp=reading.timestamp, value=reading.value, score=0.0, is_anomaly=False)
            for reading in history
        )

    values = np.asarray([reading.value for reading in history], dtype=np.float64)
    finite = np.isfinite(values)
    if np.any(finite):
        mean = float(np.mean(values[finite]))
        std = float(np.std(values[finite]))
    else:
        mean, std = 0.0, 0.0
    if std == 0.0:
        std = 1.0

    scores = np.where(finite, np.abs(values - mean) / std, np.inf)
    return tuple(
        AnomalyPoint(
            timestamp=reading.timestamp,
            value=reading.value,
            score=float(score),
            is_anomaly=bool(score > resolved.z_threshold),
        )
        for reading, score in zip(history, scores)
    )


def anomaly_sensor(asset: Asset) -> Sensor | None:
    """First vibration sensor, else the first sensor of any type."""
    vibration = asset.sensors_of_type(SensorType.VIBRATION)
    if vibration:
        return vibration[0]
    return asset.sensors[0] if asset.sensors else None


def asset_anomalies(asset: Asset, *, policy: AnomalyPolicy | None = None) -> tuple[AnomalyPoint, ...]:
    sensor = anomaly_sensor(asset)
    if sensor is None:
        return ()
    return score_anomalies(sensor.history, policy=policy)


def immediate_risk(health_score: float) -> float:
    """Risk of imminent unavailability: `100 - health`, clamped to [0, 100]."""
    return min(100.0, max(0.0, 100.0 - float(health_score)))


def cluster_for(health_score: float, mtbf: float) -> AssetCluster:
    if health_score < 60 and mtbf < 500:
        return AssetCluster.CRITICAL_RISK
    if health_score < 80:
        return AssetCluster.SILENT_DEGRADATION
    if mtbf > 1000:
        return AssetCluster.ELITE
    return AssetCluster.STABLE


def cluster_assets(assets: Sequence[Asset]) -> tuple[AssetClusterPoint, ...]:
    """Bucket every asset by its derived health score and MTBF."""
    points: list[AssetClusterPoint] = []
    for asset in assets:
        health = asset.health_score
        points.append(
            AssetClusterPoint(
                asset_id=asset.id,
                health_score=health,
                mtbf=asset.mtbf,
                cluster=cluster_for(health, asset.mtbf),
            )
        )
    return tuple(points)
