"""Severity classification and asset condition pipeline."""

from reliacalc.condition.alerts import AlertCandidate, AlertThrottle, alert_candidates
from reliacalc.condition.analytics import (
    AnomalyPolicy,
    AnomalyPoint,
    AssetCluster,
    AssetClusterPoint,
    anomaly_sensor,
    asset_anomalies,
    cluster_assets,
    cluster_for,
    immediate_risk,
    score_anomalies,
)
from reliacalc.condition.pipeline import (
    AssetCondition,
    SensorSeverity,
    TrendImport,
    apply_live_reading,
    apply_trend_batch,
    apply_trend_import,
    asset_condition,
    asset_to_record,
)
from reliacalc.condition.severity import (
    ACCELERATION_LADDER,
    VELOCITY_LADDER,
    SeverityLadder,
    classify_severity,
    health_score,
    ladder_for_unit,
    status_for_severity,
    worst_severity,
)

__all__ = [
    "ACCELERATION_LADDER",
    "AlertCandidate",
    "AlertThrottle",
    "AnomalyPoint",
    "AnomalyPolicy",
    "AssetCluster",
    "AssetClusterPoint",
    "AssetCondition",
    "SensorSeverity",
    "SeverityLadder",
    "TrendImport",
    "VELOCITY_LADDER",
    "alert_candidates",
    "anomaly_sensor",
    "asset_anomalies",
    "apply_live_reading",
    "apply_trend_batch",
    "apply_trend_import",
    "asset_condition",
    "asset_to_record",
    "classify_severity",
    "cluster_assets",
    "cluster_for",
    "health_score",
    "immediate_risk",
    "ladder_for_unit",
    "score_anomalies",
    "status_for_severity",
    "worst_severity",
]
