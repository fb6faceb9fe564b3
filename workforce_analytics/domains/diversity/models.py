"""Pandera schemas for roster inputs and the dataclasses returned by the engine."""

import dataclasses
from dataclasses import dataclass
from datetime import date, datetime

from pandera.pandas import Check, Column, DataFrameSchema

from workforce_analytics.utils.types import (
    DataQuality,
    Ethnicity,
    Gender,
    PerformanceLabel,
)

type ResultDict = dict[str, object]


employee_schema = DataFrameSchema(
    {
        "employee_id": Column(str, nullable=False),
        "full_name": Column(str, nullable=True),
        "gender": Column(str, Check.isin([g.value for g in Gender])),
        "ethnicity": Column(str, Check.isin([e.value for e in Ethnicity])),
        "has_disability": Column(bool),
        "disability_type": Column(str, nullable=True),
        "department": Column(str, Check.str_length(min_value=1)),
        "compensation": Column(float, Check.greater_than_or_equal_to(0), nullable=True),
        "status": Column(str, nullable=True),
        "position_id": Column(str, nullable=True),
    },
    strict=False,
    coerce=True,
)


position_schema = DataFrameSchema(
    {
        "position_id": Column(str, nullable=False, unique=True),
        "title": Column(str, nullable=True),
        "level": Column(str, nullable=True, required=False),
    },
    strict=False,
    coerce=True,
)


snapshot_schema = DataFrameSchema(
    {
        "company_id": Column(str),
        "period_end": Column("datetime64[ns]"),
        "women_percentage": Column(float, Check.in_range(0, 100)),
        "disability_percentage": Column(float, Check.in_range(0, 100)),
    },
    strict=False,
    coerce=True,
)


@dataclass(frozen=True)
class HistoricalSnapshot:
    period_end: date
    women_percentage: float
    disability_percentage: float


@dataclass(frozen=True)
class DemographicBreakdown:
    """Counts and percentages for one population (a tier, a department, or everyone).

    Unset gender is counted under ``other_gender``; unset ethnicity under
    ``not_declared``. Each dimension therefore partitions ``total_employees``.
    """

    total_employees: int
    women_count: int
    women_percentage: float
    men_count: int
    men_percentage: float
    other_gender_count: int
    other_gender_percentage: float
    disability_count: int
    disability_percentage: float
    no_disability_count: int
    no_disability_percentage: float
    white_count: int
    white_percentage: float
    black_count: int
    black_percentage: float
    brown_count: int
    brown_percentage: float
    asian_count: int
    asian_percentage: float
    indigenous_count: int
    indigenous_percentage: float
    not_declared_count: int
    not_declared_percentage: float
    minorities_count: int
    minorities_percentage: float
    women_minorities_count: int
    women_minorities_percentage: float


@dataclass(frozen=True)
class TierBreakdown(DemographicBreakdown):
    tier: str
    rank: int
    diversity_score: float


@dataclass(frozen=True)
class DepartmentBreakdown(DemographicBreakdown):
    department: str
    diversity_score: float


@dataclass(frozen=True)
class FunnelStage:
    tier: str
    rank: int
    women_percentage: float
    disability_percentage: float
    minorities_percentage: float


@dataclass(frozen=True)
class PipelineAnalysis:
    base_tier: str
    leadership_tiers: tuple[str, ...]
    leadership_women_average: float
    leadership_disability_average: float
    leadership_minorities_average: float
    leadership_diversity_gap: float
    gender_gap_top_vs_base: float
    disability_gap_top_vs_base: float
    ethnicity_gap_top_vs_base: float
    funnel: tuple[FunnelStage, ...]


@dataclass(frozen=True)
class TierPayGap:
    tier: str
    rank: int
    avg_compensation_women: float
    avg_compensation_men: float
    pay_gap_percentage: float


@dataclass(frozen=True)
class PayEquityPreview:
    avg_compensation_women: float
    avg_compensation_men: float
    women_sample: int
    men_sample: int
    pay_gap_percentage: float
    has_significant_gap: bool
    by_tier: tuple[TierPayGap, ...]


@dataclass(frozen=True)
class QuotaCompliance:
    regime: str
    total_employees: int
    disability_count: int
    required_percentage: float
    current_percentage: float
    is_applicable: bool
    is_compliant: bool
    missing_hires: int


@dataclass(frozen=True)
class StandardCompliance:
    is_compliant: bool
    breakdown_complete: bool
    gender_completeness: float
    ethnicity_completeness: float
    populated_tiers: int
    data_quality: DataQuality
    missing_data: tuple[str, ...]
    recommendations: tuple[str, ...]


@dataclass(frozen=True)
class PerformanceClassification:
    label: PerformanceLabel
    reasons: tuple[str, ...]


@dataclass(frozen=True)
class TrendComparison:
    has_baseline: bool
    previous_period_end: date | None
    previous_women_percentage: float
    change_women_percentage: float
    previous_disability_percentage: float
    change_disability_percentage: float
    is_improving: bool


@dataclass(frozen=True)
class AnalyticsResult:
    company_id: str
    period_start: date
    period_end: date
    total_employees: int
    total_women: int
    total_disability: int
    total_minorities: int
    women_percentage: float
    disability_percentage: float
    minorities_percentage: float
    by_hierarchy_level: tuple[TierBreakdown, ...]
    pipeline_analysis: PipelineAnalysis
    pay_equity_preview: PayEquityPreview
    top_diverse_departments: tuple[DepartmentBreakdown, ...]
    bottom_diverse_departments: tuple[DepartmentBreakdown, ...]
    quota_compliance: QuotaCompliance
    standard_compliance: StandardCompliance
    performance_classification: PerformanceClassification
    trend_comparison: TrendComparison
    calculated_at: datetime

    def to_dict(self) -> ResultDict:
        """Plain JSON-ready representation; dates become ISO strings."""
        return _jsonable(dataclasses.asdict(self))


def _jsonable(value: object) -> object:
    match value:
        case dict():
            return {k: _jsonable(v) for k, v in value.items()}
        case list() | tuple():
            return [_jsonable(v) for v in value]
        case datetime() | date():
            return value.isoformat()
        case Gender() | Ethnicity() | PerformanceLabel() | DataQuality():
            return value.value
        case _:
            return value
