"""Diversity-by-hierarchy-level analytics: fetch, classify, aggregate, evaluate."""

import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from datetime import date, datetime, timezone

import pandas as pd

from workforce_analytics.config import AnalyticsConfig, load_analytics_config
from workforce_analytics.domains.diversity.aggregate import (
    build_department_breakdowns,
    build_tier_breakdowns,
    rank_departments,
    summarize_workforce,
)
from workforce_analytics.domains.diversity.compliance import check_reporting_compliance
from workforce_analytics.domains.diversity.hierarchy import HierarchyClassifier
from workforce_analytics.domains.diversity.ingest import (
    EmployeeProvider,
    PositionProvider,
    SnapshotProvider,
)
from workforce_analytics.domains.diversity.models import (
    AnalyticsResult,
    HistoricalSnapshot,
    employee_schema,
    position_schema,
)
from workforce_analytics.domains.diversity.pay_equity import estimate_pay_equity
from workforce_analytics.domains.diversity.performance import classify_performance
from workforce_analytics.domains.diversity.pipeline_gap import analyze_pipeline
from workforce_analytics.domains.diversity.quota import evaluate_quota
from workforce_analytics.domains.diversity.transform import (
    attach_position_titles,
    normalize_employee_records,
    normalize_positions,
)
from workforce_analytics.domains.diversity.trend import compare_with_snapshot, snapshot_cutoff
from workforce_analytics.errors import DataFetchTimeoutError, NoActiveEmployeesError
from workforce_analytics.utils.validators import validate_dataframe, validate_unique

logger = logging.getLogger(__name__)

type FetchedData = tuple[pd.DataFrame, pd.DataFrame, HistoricalSnapshot | None]


class DiversityAnalyticsEngine:
    """Computes an :class:`AnalyticsResult` for one company and period.

    The engine holds no per-call state, so one instance can serve concurrent
    requests for any number of companies.
    """

    def __init__(
        self,
        employees: EmployeeProvider,
        positions: PositionProvider,
        snapshots: SnapshotProvider,
        config: AnalyticsConfig | None = None,
    ):
        self.employees = employees
        self.positions = positions
        self.snapshots = snapshots
        self.config = config or load_analytics_config()
        self.classifier = HierarchyClassifier(self.config.catalog)

    def _fetch(self, company_id: str, cutoff: date) -> FetchedData:
        """Issue the three independent provider reads concurrently."""
        executor = ThreadPoolExecutor(max_workers=3, thread_name_prefix="diversity-fetch")
        try:
            futures = {
                "employees": executor.submit(self.employees.fetch_active_employees, company_id),
                "positions": executor.submit(self.positions.fetch_positions),
                "snapshot": executor.submit(self.snapshots.fetch_latest_snapshot, company_id, cutoff),
            }
            done, pending = wait(
                futures.values(),
                timeout=self.config.fetch_timeout_seconds,
                return_when=FIRST_EXCEPTION,
            )
            for future in done:
                if future.exception() is not None:
                    raise future.exception()
            if pending:
                late = [name for name, f in futures.items() if f in pending]
                raise DataFetchTimeoutError(
                    f"Timed out after {self.config.fetch_timeout_seconds}s waiting for {', '.join(late)}"
                )
            return (
                futures["employees"].result(),
                futures["positions"].result(),
                futures["snapshot"].result(),
            )
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    def _prepare(self, raw_employees: pd.DataFrame, raw_positions: pd.DataFrame) -> pd.DataFrame:
        employees = normalize_employee_records(raw_employees)
        positions = normalize_positions(raw_positions)

        for name, frame, schema in (
            ("employee", employees, employee_schema),
            ("position", positions, position_schema),
        ):
            outcome = validate_dataframe(frame, schema)
            if not outcome["valid"]:
                logger.warning(
                    "%s data failed %d schema checks: %s",
                    name.capitalize(), len(outcome["errors"]), outcome["errors"][:5],
                )
        duplicates = validate_unique(employees, ["employee_id"])
        if not duplicates["valid"]:
            logger.warning("Employee roster: %s", duplicates["errors"][0])

        employees = attach_position_titles(employees, positions)
        return self.classifier.classify_frame(employees)

    def compute(self, company_id: str, period_start: date, period_end: date) -> AnalyticsResult:
        """Run the full analysis. Either returns a complete result or raises."""
        if period_start > period_end:
            raise ValueError(f"Period start {period_start} is after period end {period_end}")

        config = self.config
        cutoff = snapshot_cutoff(period_start, config.trend_lookback_months)
        raw_employees, raw_positions, snapshot = self._fetch(company_id, cutoff)

        if raw_employees is None or raw_employees.empty:
            raise NoActiveEmployeesError(company_id)

        employees = self._prepare(raw_employees, raw_positions)
        minorities = config.minority_ethnicities

        workforce = summarize_workforce(employees, minorities)
        tiers = build_tier_breakdowns(employees, minorities)
        departments = build_department_breakdowns(employees, minorities)
        top, bottom = rank_departments(departments, config.department_rank_size)

        pipeline = analyze_pipeline(tiers, config.catalog)
        pay_equity = estimate_pay_equity(employees, config.pay_gap_threshold)
        quota = evaluate_quota(workforce.total_employees, workforce.disability_count, config.quota_table)
        standard = check_reporting_compliance(employees, len(tiers), config.compliance)
        performance = classify_performance(
            pipeline.leadership_women_average,
            workforce.disability_percentage,
            quota.is_compliant,
            config.performance,
        )
        trend = compare_with_snapshot(
            workforce.women_percentage, workforce.disability_percentage, snapshot
        )

        logger.info(
            "Company %s: %d employees, %d tiers, performance %s",
            company_id, workforce.total_employees, len(tiers), performance.label,
        )

        return AnalyticsResult(
            company_id=str(company_id),
            period_start=period_start,
            period_end=period_end,
            total_employees=workforce.total_employees,
            total_women=workforce.women_count,
            total_disability=workforce.disability_count,
            total_minorities=workforce.minorities_count,
            women_percentage=workforce.women_percentage,
            disability_percentage=workforce.disability_percentage,
            minorities_percentage=workforce.minorities_percentage,
            by_hierarchy_level=tuple(tiers),
            pipeline_analysis=pipeline,
            pay_equity_preview=pay_equity,
            top_diverse_departments=top,
            bottom_diverse_departments=bottom,
            quota_compliance=quota,
            standard_compliance=standard,
            performance_classification=performance,
            trend_comparison=trend,
            calculated_at=datetime.now(timezone.utc),
        )


def compute_diversity_metrics(
    company_id: str,
    period_start: date,
    period_end: date,
    *,
    employees: EmployeeProvider,
    positions: PositionProvider,
    snapshots: SnapshotProvider,
    config: AnalyticsConfig | None = None,
) -> AnalyticsResult:
    """One-shot convenience wrapper around :class:`DiversityAnalyticsEngine`."""
    engine = DiversityAnalyticsEngine(employees, positions, snapshots, config)
    return engine.compute(company_id, period_start, period_end)
