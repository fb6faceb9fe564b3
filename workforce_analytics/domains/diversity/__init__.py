"""Diversity by hierarchy level (GRI 405-1) domain.

Classifies employees into hierarchy tiers from their position titles, breaks
the workforce down by gender, disability and ethnicity per tier and per
department, and evaluates pipeline gaps, pay equity, the disability quota and
reporting completeness.
"""

from datetime import date
from pathlib import Path

from workforce_analytics.config import AnalyticsConfig
from workforce_analytics.domains.diversity.ingest import (
    CsvEmployeeProvider,
    CsvPositionProvider,
    CsvSnapshotProvider,
)
from workforce_analytics.domains.diversity.models import AnalyticsResult
from workforce_analytics.domains.diversity.orchestrator import (
    DiversityAnalyticsEngine,
    compute_diversity_metrics,
)


def validate(
    employees_path: str | Path,
    positions_path: str | Path,
    snapshots_path: str | Path | None = None,
) -> dict[str, str]:
    """Validate that the roster data sources are accessible."""
    required = {"employees": Path(employees_path), "positions": Path(positions_path)}
    for name, path in required.items():
        if not path.exists():
            return {"status": "error", "message": f"{name} source missing: {path}"}
    if snapshots_path is not None and not Path(snapshots_path).exists():
        return {"status": "skipped", "reason": f"no snapshot history at {snapshots_path}"}
    return {"status": "ok"}


def run(
    company_id: str,
    period_start: date,
    period_end: date,
    employees_path: str | Path,
    positions_path: str | Path,
    snapshots_path: str | Path | None = None,
    config: AnalyticsConfig | None = None,
) -> AnalyticsResult:
    """Execute the analysis against CSV exports."""
    engine = DiversityAnalyticsEngine(
        CsvEmployeeProvider(employees_path),
        CsvPositionProvider(positions_path),
        CsvSnapshotProvider(snapshots_path),
        config,
    )
    return engine.compute(company_id, period_start, period_end)


__all__ = [
    "DiversityAnalyticsEngine",
    "compute_diversity_metrics",
    "run",
    "validate",
]
