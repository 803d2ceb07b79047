"""Asset update pipeline: the single place where derived condition fields are computed."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Callable, Sequence

from reliacalc.condition.severity import classify_severity, health_score, status_for_severity, worst_severity
from reliacalc.config.policies import PipelinePolicy
from reliacalc.domain.models import (
    Asset,
    AssetStatus,
    DataSource,
    Sensor,
    SensorReading,
    SensorType,
    SeverityLevel,
)
from reliacalc.domain.units import coerce_float

LOGGER = logging.getLogger(__name__)

IMPORTED_ASSET_LOCATION = "Trend import"


@dataclass(frozen=True, slots=True)
class SensorSeverity:
    """Classification of one vibration sensor's latest reading."""

    sensor_id: str
    unit: str
    value: float
    severity: SeverityLevel


@dataclass(frozen=True, slots=True)
class AssetCondition:
    """Derived condition of one asset."""

    severity: SeverityLevel
    health_score: int
    status: AssetStatus
    sensor_severities: tuple[SensorSeverity, ...] = ()


@dataclass(frozen=True, slots=True)
class TrendImport:
    """One measurement point parsed from a vendor trend file.

    `tag` follows the `"<asset name> - <point tag>"` convention.
    """

    tag: str
    unit: str
    readings: tuple[SensorReading, ...]

    def __post_init__(self) -> None:
        if " - " not in self.tag:
            raise ValueError(f"trend tag must look like '<asset> - <point>': {self.tag!r}")

    @property
    def asset_name(self) -> str:
        return self.tag.split(" - ", 1)[0].strip()

    @property
    def point_tag(self) -> str:
        return self.tag.split(" - ", 1)[1].strip()


def asset_condition(asset: Asset) -> AssetCondition:
    """Classify every vibration sensor by its own unit and aggregate worst-of."""
    classified: list[SensorSeverity] = []
    for sensor in asset.sensors_of_type(SensorType.VIBRATION):
        value = sensor.current_value
        if value is None:
            continue
        classified.append(
            SensorSeverity(
                sensor_id=sensor.id,
                unit=sensor.unit,
                value=value,
                severity=classify_severity(value, sensor.unit),
            )
        )

    severity = worst_severity(item.severity for item in classified)
    status = AssetStatus.MAINTENANCE if asset.maintenance else status_for_severity(severity)
    return AssetCondition(
        severity=severity,
        health_score=health_score(severity),
        status=status,
        sensor_severities=tuple(classified),
    )


def apply_live_reading(
    asset: Asset,
    sensor_type: SensorType,
    value: Any,
    *,
    timestamp: datetime,
    policy: PipelinePolicy | None = None,
) -> Asset:
    """Append a live telemetry value to the asset's continuous sensor of `sensor_type`.

    A continuous sensor is created on first contact. History is trimmed to
    `policy.live_history_limit` readings. Non-numeric values are stored as NaN
    and classify as D.
    """
    resolved_policy = PipelinePolicy() if policy is None else policy
    reading = SensorReading(timestamp=timestamp, value=coerce_float(value))

    sensors = list(asset.sensors)
    for idx, sensor in enumerate(sensors):
        if sensor.type == sensor_type and sensor.data_source == DataSource.CONTINUOUS:
            sensors[idx] = sensor.append(reading, max_history=resolved_policy.live_history_limit)
            LOGGER.debug("Appended live %s reading %s to %s/%s", sensor_type.value, value, asset.id, sensor.id)
            break
    else:
        unit = "mm/s" if sensor_type == SensorType.VIBRATION else "°C"
        sensors.append(
            Sensor(
                id=f"IOT-{sensor_type.value.upper()}",
                type=sensor_type,
                unit=unit,
                threshold_min=0.0,
                threshold_max=resolved_policy.velocity_alarm_max,
                data_source=DataSource.CONTINUOUS,
                history=(reading,),
                label=f"{sensor_type.value} (Online)",
            )
        )
        LOGGER.debug("Created continuous %s sensor on asset %s", sensor_type.value, asset.id)

    return replace(asset, sensors=tuple(sensors))


def apply_trend_import(
    asset: Asset,
    point_tag: str,
    unit: str,
    readings: Sequence[SensorReading],
    *,
    policy: PipelinePolicy | None = None,
) -> Asset:
    """Replace (or create) the periodic vibration sensor for one imported trend point.

    Readings are stored sorted by timestamp.
    """
    if not readings:
        raise ValueError(f"trend import for {asset.id}/{point_tag} has no readings")
    if not point_tag.strip():
        raise ValueError("point_tag must not be empty")

    resolved_policy = PipelinePolicy() if policy is None else policy
    sensor_id = f"{point_tag}_{unit}"
    history = tuple(sorted(readings, key=lambda reading: reading.timestamp))

    sensors = list(asset.sensors)
    for idx, sensor in enumerate(sensors):
        if sensor.id == sensor_id and sensor.data_source == DataSource.PERIODIC:
            sensors[idx] = sensor.with_history(history)
            LOGGER.debug("Replaced %d readings on %s/%s", len(history), asset.id, sensor_id)
            break
    else:
        sensors.append(
            Sensor(
                id=sensor_id,
                type=SensorType.VIBRATION,
                unit=unit,
                threshold_min=0.0,
                threshold_max=resolved_policy.alarm_max_for_unit(unit),
                data_source=DataSource.PERIODIC,
                history=history,
                label=f"{point_tag} ({unit})",
            )
        )
        LOGGER.debug("Created periodic sensor %s on asset %s", sensor_id, asset.id)

    return replace(asset, sensors=tuple(sensors))


def apply_trend_batch(
    assets: Sequence[Asset],
    items: Sequence[TrendImport],
    *,
    policy: PipelinePolicy | None = None,
    id_factory: Callable[[str], str] | None = None,
) -> tuple[Asset, ...]:
    """Apply a parsed trend file to a fleet, creating assets for unknown names.

    Asset names match case-insensitively. Returns the full updated fleet in
    original order, with new assets appended.
    """
    make_id = _default_asset_id if id_factory is None else id_factory
    fleet = list(assets)

    for item in items:
        name = item.asset_name
        idx = next(
            (pos for pos, candidate in enumerate(fleet) if candidate.name.lower() == name.lower()),
            None,
        )
        if idx is None:
            fleet.append(Asset(id=make_id(name), name=name, location=IMPORTED_ASSET_LOCATION))
            idx = len(fleet) - 1
            LOGGER.info("Trend import created asset %s (%s)", fleet[idx].id, name)

        fleet[idx] = apply_trend_import(fleet[idx], item.point_tag, item.unit, item.readings, policy=policy)

    return tuple(fleet)


def asset_to_record(asset: Asset) -> dict[str, Any]:
    """Serialize an asset into the store document shape, including derived fields."""
    condition = asset_condition(asset)
    record: dict[str, Any] = {
        "id": asset.id,
        "name": asset.name,
        "location": asset.location,
        "status": condition.status.value,
        "severity": condition.severity.value,
        "healthScore": condition.health_score,
        "mtbf": asset.mtbf,
        "mttr": asset.mttr,
        "sensors": [_sensor_to_record(sensor) for sensor in asset.sensors],
        "fmeca": [
            {
                "id": mode.id,
                "component": mode.component,
                "mode": mode.mode,
                "effect": mode.effect,
                "cause": mode.cause,
                "action": mode.action,
                "severity": mode.severity,
                "occurrence": mode.occurrence,
                "detection": mode.detection,
                "rpn": mode.rpn,
                "resSeverity": mode.res_severity,
                "resOccurrence": mode.res_occurrence,
                "resDetection": mode.res_detection,
                "resRPN": mode.res_rpn,
            }
            for mode in asset.fmeca
        ],
    }
    if asset.criticality is not None:
        record["criticality"] = {
            "probability": asset.criticality.probability,
            "impactEnvironment": asset.criticality.impact_environment,
            "impactEconomic": asset.criticality.impact_economic,
            "impactHuman": asset.criticality.impact_human,
        }
    return record


def _sensor_to_record(sensor: Sensor) -> dict[str, Any]:
    return {
        "id": sensor.id,
        "type": sensor.type.value,
        "label": sensor.label,
        "unit": sensor.unit,
        "currentValue": sensor.current_value,
        "thresholdMin": sensor.threshold_min,
        "thresholdMax": sensor.threshold_max,
        "dataSource": sensor.data_source.value,
        "history": [
            {"timestamp": reading.timestamp.isoformat(), "value": reading.value}
            for reading in sensor.history
        ],
    }


def _default_asset_id(name: str) -> str:
    return f"asset-{uuid.uuid4().hex[:10]}"
