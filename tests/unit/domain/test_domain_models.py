"""Unit tests for domain model invariants and numeric helpers."""

from __future__ import annotations

import math
from datetime import UTC, datetime, timedelta

import pytest

from reliacalc.domain import (
    Asset,
    DataSource,
    Sensor,
    SensorReading,
    SensorType,
    SeverityLevel,
    coerce_float,
    finite_or_zero,
    round_half_up,
    um_to_mm,
)

T0 = datetime(2025, 1, 1, tzinfo=UTC)


def _sensor(*values: float, sensor_id: str = "V1") -> Sensor:
    return Sensor(
        id=sensor_id,
        type=SensorType.VIBRATION,
        unit="mm/s",
        threshold_min=0.0,
        threshold_max=4.5,
        data_source=DataSource.CONTINUOUS,
        history=tuple(
            SensorReading(timestamp=T0 + timedelta(minutes=idx), value=value) for idx, value in enumerate(values)
        ),
    )


def test_current_value_tracks_last_reading() -> None:
    sensor = _sensor(1.0, 2.5)
    assert sensor.current_value == 2.5

    appended = sensor.append(SensorReading(timestamp=T0 + timedelta(hours=1), value=0.7))
    assert appended.current_value == 0.7
    assert sensor.current_value == 2.5


def test_empty_sensor_has_no_current_value() -> None:
    assert _sensor().current_value is None


def test_history_must_be_time_ascending() -> None:
    sensor = _sensor(1.0)
    with pytest.raises(ValueError, match="time-ascending"):
        sensor.append(SensorReading(timestamp=T0 - timedelta(minutes=1), value=2.0))


def test_append_rejects_non_positive_history_limit() -> None:
    with pytest.raises(ValueError, match="max_history"):
        _sensor(1.0).append(SensorReading(timestamp=T0 + timedelta(hours=1), value=2.0), max_history=0)


def test_asset_rejects_duplicate_sensor_ids() -> None:
    with pytest.raises(ValueError, match="duplicate sensor ids"):
        Asset(id="a", name="A", sensors=(_sensor(1.0), _sensor(2.0)))


def test_asset_sensor_queries() -> None:
    asset = Asset(id="a", name="A", sensors=(_sensor(1.0, sensor_id="V1"), _sensor(2.0, sensor_id="V2")))

    assert [sensor.id for sensor in asset.sensors_of_type(SensorType.VIBRATION)] == ["V1", "V2"]
    assert asset.sensors_of_type(SensorType.FLOW) == ()
    assert asset.get_sensor("V2") is not None
    assert asset.get_sensor("missing") is None


def test_severity_rank_order() -> None:
    assert [level.rank for level in SeverityLevel] == [0, 1, 2, 3]


def test_numeric_helpers() -> None:
    assert coerce_float("4.2") == 4.2
    assert math.isnan(coerce_float("x"))
    assert math.isnan(coerce_float(None))
    assert math.isnan(coerce_float(True))
    assert finite_or_zero(float("inf")) == 0.0
    assert finite_or_zero("12") == 12.0
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(2.49) == 2
    assert um_to_mm(18) == pytest.approx(0.018)
