"""Fleet-level KPI aggregation."""

from reliacalc.fleet.kpi import FleetKpiSummary, summarize_fleet

__all__ = ["FleetKpiSummary", "summarize_fleet"]
