"""Demographic breakdowns per hierarchy tier and per department."""

import logging

import pandas as pd

from workforce_analytics.domains.diversity.indices import simpson_diversity_index
from workforce_analytics.domains.diversity.models import (
    DemographicBreakdown,
    DepartmentBreakdown,
    TierBreakdown,
)
from workforce_analytics.utils.types import Ethnicity, Gender, safe_percentage

logger = logging.getLogger(__name__)

type DemographicCounts = dict[str, int | float]

_ETHNICITY_BUCKETS = {
    "white": (Ethnicity.WHITE,),
    "black": (Ethnicity.BLACK,),
    "brown": (Ethnicity.BROWN,),
    "asian": (Ethnicity.ASIAN,),
    "indigenous": (Ethnicity.INDIGENOUS,),
    "not_declared": (Ethnicity.NOT_DECLARED, Ethnicity.UNKNOWN),
}


def summarize_demographics(
    group: pd.DataFrame,
    minority_ethnicities: frozenset[Ethnicity],
) -> DemographicCounts:
    """Count every demographic sub-group of ``group`` and attach its percentage."""
    total = len(group)
    gender = group["gender"]
    ethnicity = group["ethnicity"]
    disabled = group["has_disability"].astype(bool)

    is_woman = gender == Gender.FEMALE.value
    is_minority = ethnicity.isin([e.value for e in minority_ethnicities])

    counts: dict[str, int] = {
        "women": int(is_woman.sum()),
        "men": int((gender == Gender.MALE.value).sum()),
    }
    # other and unset gender share one bucket so the dimension partitions the group
    counts["other_gender"] = total - counts["women"] - counts["men"]
    counts["disability"] = int(disabled.sum())
    counts["no_disability"] = total - counts["disability"]
    for bucket, members in _ETHNICITY_BUCKETS.items():
        counts[bucket] = int(ethnicity.isin([m.value for m in members]).sum())
    counts["minorities"] = int(is_minority.sum())
    counts["women_minorities"] = int((is_woman & is_minority).sum())

    summary: DemographicCounts = {"total_employees": total}
    for key, count in counts.items():
        summary[f"{key}_count"] = count
        summary[f"{key}_percentage"] = safe_percentage(count, total)
    return summary


def summarize_workforce(
    employees: pd.DataFrame,
    minority_ethnicities: frozenset[Ethnicity],
) -> DemographicBreakdown:
    """Company-wide totals, computed the same way as each tier."""
    return DemographicBreakdown(**summarize_demographics(employees, minority_ethnicities))


def build_tier_breakdowns(
    employees: pd.DataFrame,
    minority_ethnicities: frozenset[Ethnicity],
) -> list[TierBreakdown]:
    """One breakdown per populated tier, ordered by ascending rank."""
    breakdowns = []
    for (tier, rank), group in employees.groupby(["tier", "tier_rank"], sort=False):
        breakdowns.append(TierBreakdown(
            tier=tier,
            rank=int(rank),
            diversity_score=simpson_diversity_index(group),
            **summarize_demographics(group, minority_ethnicities),
        ))

    breakdowns.sort(key=lambda b: b.rank)
    logger.info("Built breakdowns for %d hierarchy tiers", len(breakdowns))
    return breakdowns


def build_department_breakdowns(
    employees: pd.DataFrame,
    minority_ethnicities: frozenset[Ethnicity],
) -> list[DepartmentBreakdown]:
    """One breakdown per department, most diverse first (ties by name)."""
    breakdowns = [
        DepartmentBreakdown(
            department=department,
            diversity_score=simpson_diversity_index(group),
            **summarize_demographics(group, minority_ethnicities),
        )
        for department, group in employees.groupby("department", sort=True)
    ]
    breakdowns.sort(key=lambda b: (-b.diversity_score, b.department))
    logger.info("Built breakdowns for %d departments", len(breakdowns))
    return breakdowns


def rank_departments(
    breakdowns: list[DepartmentBreakdown],
    size: int,
) -> tuple[tuple[DepartmentBreakdown, ...], tuple[DepartmentBreakdown, ...]]:
    """Split score-ordered departments into the top ``size`` and the bottom ``size``.

    The bottom list starts with the least diverse department. With fewer than
    ``2 * size`` departments the two lists overlap.
    """
    if size <= 0:
        return (), ()
    top = tuple(breakdowns[:size])
    bottom = tuple(reversed(breakdowns[-size:]))
    return top, bottom
