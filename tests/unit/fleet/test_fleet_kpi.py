"""Tests for fleet KPI aggregation."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from reliacalc.domain import Asset, DataSource, Sensor, SensorReading, SensorType, SeverityLevel
from reliacalc.fleet import summarize_fleet


def _asset(asset_id: str, vibration: float, *, mtbf: float, mttr: float) -> Asset:
    sensor = Sensor(
        id=f"{asset_id}-vib",
        type=SensorType.VIBRATION,
        unit="mm/s",
        threshold_min=0.0,
        threshold_max=4.5,
        data_source=DataSource.CONTINUOUS,
        history=(SensorReading(timestamp=datetime(2025, 1, 1, tzinfo=UTC), value=vibration),),
    )
    return Asset(id=asset_id, name=asset_id, sensors=(sensor,), mtbf=mtbf, mttr=mttr)


def test_summarize_fleet_means_and_distribution() -> None:
    summary = summarize_fleet(
        (
            _asset("a", 1.0, mtbf=1000.0, mttr=10.0),
            _asset("b", 3.0, mtbf=500.0, mttr=20.0),
            _asset("c", 8.0, mtbf=300.0, mttr=30.0),
        )
    )

    assert summary.asset_count == 3
    assert summary.mean_mtbf == pytest.approx(600.0)
    assert summary.mean_mttr == pytest.approx(20.0)
    assert summary.mean_health_score == pytest.approx((100 + 55 + 15) / 3)
    assert summary.availability == pytest.approx(600.0 / 620.0)
    assert dict(summary.severity_distribution) == {"A": 1, "B": 0, "C": 1, "D": 1}
    assert summary.assets_with(SeverityLevel.D) == 1


def test_summarize_empty_fleet() -> None:
    summary = summarize_fleet(())

    assert summary.asset_count == 0
    assert summary.mean_mtbf is None
    assert summary.availability is None
    assert dict(summary.severity_distribution) == {"A": 0, "B": 0, "C": 0, "D": 0}


def test_availability_undefined_without_reliability_data() -> None:
    summary = summarize_fleet((Asset(id="new", name="New"),))

    assert summary.availability is None
    assert summary.mean_health_score == pytest.approx(100.0)
