"""Fleet-level reliability indicators for dashboard summaries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from reliacalc.condition.pipeline import asset_condition
from reliacalc.domain.models import Asset, SeverityLevel


@dataclass(frozen=True, slots=True)
class FleetKpiSummary:
    """Averages and severity distribution across a set of assets."""

    asset_count: int
    mean_mtbf: float | None
    mean_mttr: float | None
    mean_health_score: float | None
    availability: float | None
    severity_distribution: tuple[tuple[str, int], ...]

    def assets_with(self, severity: SeverityLevel) -> int:
        return dict(self.severity_distribution)[severity.value]


def summarize_fleet(assets: Sequence[Asset]) -> FleetKpiSummary:
    """Compute mean MTBF/MTTR/health and count assets per severity code.

    Availability is `MTBF / (MTBF + MTTR)` on the fleet means and is `None`
    when both means are zero.
    """
    counts = {level: 0 for level in SeverityLevel}
    if not assets:
        return FleetKpiSummary(
            asset_count=0,
            mean_mtbf=None,
            mean_mttr=None,
            mean_health_score=None,
            availability=None,
            severity_distribution=tuple((level.value, 0) for level in SeverityLevel),
        )

    conditions = [asset_condition(asset) for asset in assets]
    for condition in conditions:
        counts[condition.severity] += 1

    mean_mtbf = float(np.mean(np.asarray([asset.mtbf for asset in assets], dtype=np.float64)))
    mean_mttr = float(np.mean(np.asarray([asset.mttr for asset in assets], dtype=np.float64)))
    mean_health = float(
        np.mean(np.asarray([condition.health_score for condition in conditions], dtype=np.float64))
    )
    uptime_cycle = mean_mtbf + mean_mttr

    return FleetKpiSummary(
        asset_count=len(assets),
        mean_mtbf=mean_mtbf,
        mean_mttr=mean_mttr,
        mean_health_score=mean_health,
        availability=(mean_mtbf / uptime_cycle) if uptime_cycle > 0.0 else None,
        severity_distribution=tuple((level.value, counts[level]) for level in SeverityLevel),
    )
