"""GRI 405-1 style reporting compliance: demographic completeness and tier granularity."""

import logging

import pandas as pd

from workforce_analytics.config import ComplianceThresholds
from workforce_analytics.domains.diversity.models import StandardCompliance
from workforce_analytics.utils.types import Ethnicity, Gender, classify_quality, safe_percentage

logger = logging.getLogger(__name__)


def data_completeness(employees: pd.DataFrame) -> tuple[float, float]:
    """Percent of records with a usable gender and a declared ethnicity."""
    total = len(employees)
    with_gender = int((employees["gender"] != Gender.UNKNOWN.value).sum())
    with_ethnicity = int(
        (~employees["ethnicity"].isin([Ethnicity.UNKNOWN.value, Ethnicity.NOT_DECLARED.value])).sum()
    )
    return safe_percentage(with_gender, total), safe_percentage(with_ethnicity, total)


def check_reporting_compliance(
    employees: pd.DataFrame,
    populated_tiers: int,
    thresholds: ComplianceThresholds,
) -> StandardCompliance:
    """Evaluate whether the roster supports a GRI 405-1 disclosure.

    Each failed condition adds one missing-data entry and a matching
    recommendation; the dataset is compliant only when nothing is missing.
    """
    gender_pct, ethnicity_pct = data_completeness(employees)
    minimum = thresholds.min_completeness_pct

    missing_data: list[str] = []
    recommendations: list[str] = []

    if gender_pct < minimum:
        missing_data.append(f"Incomplete gender data ({gender_pct:.1f}%)")
        recommendations.append("Fill in gender for every active employee")
    if ethnicity_pct < minimum:
        missing_data.append(f"Incomplete ethnicity data ({ethnicity_pct:.1f}%)")
        recommendations.append("Collect self-declared ethnicity (race/colour) from every active employee")
    if populated_tiers < thresholds.min_populated_tiers:
        missing_data.append(
            f"Limited hierarchy structure ({populated_tiers} of "
            f"{thresholds.min_populated_tiers} required levels populated)"
        )
        recommendations.append("Define clear hierarchy levels in the organizational structure")

    breakdown_complete = gender_pct >= minimum and ethnicity_pct >= minimum
    if missing_data:
        logger.warning("Reporting compliance gaps: %s", "; ".join(missing_data))

    return StandardCompliance(
        is_compliant=not missing_data,
        breakdown_complete=breakdown_complete,
        gender_completeness=gender_pct,
        ethnicity_completeness=ethnicity_pct,
        populated_tiers=populated_tiers,
        data_quality=classify_quality(gender_pct / 100, ethnicity_pct / 100),
        missing_data=tuple(missing_data),
        recommendations=tuple(recommendations),
    )
