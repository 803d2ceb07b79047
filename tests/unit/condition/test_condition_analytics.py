"""Unit tests for anomaly scoring, immediate risk, and asset clustering."""

from __future__ import annotations

import math
from datetime import UTC, datetime, timedelta

import pytest

from reliacalc.condition import (
    AnomalyPolicy,
    AssetCluster,
    anomaly_sensor,
    asset_anomalies,
    cluster_assets,
    cluster_for,
    immediate_risk,
    score_anomalies,
)
from reliacalc.domain import Asset, DataSource, Sensor, SensorReading, SensorType

T0 = datetime(2025, 4, 1, tzinfo=UTC)


def _history(*values: float) -> tuple[SensorReading, ...]:
    return tuple(
        SensorReading(timestamp=T0 + timedelta(hours=idx), value=value) for idx, value in enumerate(values)
    )


def _sensor(sensor_id: str, sensor_type: SensorType, *values: float) -> Sensor:
    return Sensor(
        id=sensor_id,
        type=sensor_type,
        unit="mm/s" if sensor_type == SensorType.VIBRATION else "°C",
        threshold_min=0.0,
        threshold_max=100.0,
        data_source=DataSource.PERIODIC,
        history=_history(*values),
    )


def test_spike_is_flagged_with_population_std() -> None:
    points = score_anomalies(_history(*([1.0] * 9), 10.0))

    # mean 1.9, population std 2.7
    assert points[-1].score == pytest.approx(3.0)
    assert points[-1].is_anomaly is True
    assert points[0].score == pytest.approx(0.9 / 2.7)
    assert [point.is_anomaly for point in points[:-1]] == [False] * 9


def test_short_history_is_not_scored() -> None:
    points = score_anomalies(_history(1.0, 50.0, 1.0, 1.0))

    assert [point.score for point in points] == [0.0] * 4
    assert not any(point.is_anomaly for point in points)


def test_flat_history_uses_unit_spread() -> None:
    points = score_anomalies(_history(2.0, 2.0, 2.0, 2.0, 2.0))

    assert [point.score for point in points] == [0.0] * 5


def test_unreadable_reading_is_always_anomalous() -> None:
    points = score_anomalies(_history(1.0, 1.0, float("nan"), 1.0, 1.0))

    assert math.isinf(points[2].score)
    assert points[2].is_anomaly is True
    assert [point.score for idx, point in enumerate(points) if idx != 2] == [0.0] * 4


def test_custom_policy_threshold() -> None:
    history = _history(*([1.0] * 9), 10.0)

    assert score_anomalies(history, policy=AnomalyPolicy(z_threshold=3.5))[-1].is_anomaly is False


def test_anomaly_policy_validation() -> None:
    with pytest.raises(ValueError, match="z_threshold"):
        AnomalyPolicy(z_threshold=0.0)
    with pytest.raises(ValueError, match="min_readings"):
        AnomalyPolicy(min_readings=1)


def test_anomaly_sensor_prefers_vibration() -> None:
    asset = Asset(
        id="m-1",
        name="Motor",
        sensors=(
            _sensor("T1", SensorType.TEMPERATURE, 60.0),
            _sensor("V1", SensorType.VIBRATION, *([1.0] * 9), 10.0),
        ),
    )

    sensor = anomaly_sensor(asset)
    assert sensor is not None
    assert sensor.id == "V1"
    assert asset_anomalies(asset)[-1].is_anomaly is True


def test_asset_without_sensors_has_no_anomalies() -> None:
    asset = Asset(id="m-2", name="Motor")

    assert anomaly_sensor(asset) is None
    assert asset_anomalies(asset) == ()


@pytest.mark.parametrize(("health", "expected"), [(100, 0.0), (55, 45.0), (15, 85.0), (120, 0.0), (-10, 100.0)])
def test_immediate_risk_is_clamped_inverse_health(health: float, expected: float) -> None:
    assert immediate_risk(health) == expected


@pytest.mark.parametrize(
    ("health", "mtbf", "expected"),
    [
        (15, 300.0, AssetCluster.CRITICAL_RISK),
        (55, 800.0, AssetCluster.SILENT_DEGRADATION),
        (15, 500.0, AssetCluster.SILENT_DEGRADATION),
        (100, 1500.0, AssetCluster.ELITE),
        (100, 1000.0, AssetCluster.STABLE),
    ],
)
def test_cluster_boundaries(health: int, mtbf: float, expected: AssetCluster) -> None:
    assert cluster_for(health, mtbf) == expected


def test_cluster_assets_uses_derived_health() -> None:
    fleet = (
        Asset(id="a", name="A", sensors=(_sensor("V", SensorType.VIBRATION, 8.0),), mtbf=200.0),
        Asset(id="b", name="B", sensors=(_sensor("V", SensorType.VIBRATION, 1.0),), mtbf=2000.0),
    )

    points = cluster_assets(fleet)

    assert [(point.asset_id, point.health_score, point.cluster) for point in points] == [
        ("a", 15, AssetCluster.CRITICAL_RISK),
        ("b", 100, AssetCluster.ELITE),
    ]
