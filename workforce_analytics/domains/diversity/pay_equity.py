"""Gender pay-gap preview (GRI 405-2 style), overall and within each tier.

This is a preview, not a regulatory pay-equity study: it does not control for
role, tenure or performance. Only female and male employees with a positive
compensation are compared.
"""

import logging

import pandas as pd

from workforce_analytics.domains.diversity.models import PayEquityPreview, TierPayGap
from workforce_analytics.utils.types import Gender

logger = logging.getLogger(__name__)


def _pay_gap(avg_men: float, avg_women: float) -> float:
    if avg_men == 0:
        return 0.0
    return (avg_men - avg_women) / avg_men * 100


def _mean_or_zero(values: pd.Series) -> float:
    return float(values.mean()) if len(values) else 0.0


def _paid(employees: pd.DataFrame) -> tuple[pd.DataFrame, pd.DataFrame]:
    paid = employees[employees["compensation"].notna() & (employees["compensation"] > 0)]
    women = paid[paid["gender"] == Gender.FEMALE.value]
    men = paid[paid["gender"] == Gender.MALE.value]
    return women, men


def estimate_pay_equity(employees: pd.DataFrame, significance_threshold: float = 10.0) -> PayEquityPreview:
    """Mean compensation by gender and the resulting gap, overall and per tier."""
    women, men = _paid(employees)
    avg_women = _mean_or_zero(women["compensation"])
    avg_men = _mean_or_zero(men["compensation"])
    gap = _pay_gap(avg_men, avg_women)

    by_tier = []
    if "tier" in employees.columns:
        for (tier, rank), group in employees.groupby(["tier", "tier_rank"], sort=False):
            tier_women, tier_men = _paid(group)
            if tier_women.empty and tier_men.empty:
                continue
            tier_avg_women = _mean_or_zero(tier_women["compensation"])
            tier_avg_men = _mean_or_zero(tier_men["compensation"])
            by_tier.append(TierPayGap(
                tier=tier,
                rank=int(rank),
                avg_compensation_women=tier_avg_women,
                avg_compensation_men=tier_avg_men,
                pay_gap_percentage=_pay_gap(tier_avg_men, tier_avg_women),
            ))
        by_tier.sort(key=lambda g: g.rank)

    logger.info(
        "Pay equity preview: %d women, %d men with compensation, gap %.2f%%",
        len(women), len(men), gap,
    )
    return PayEquityPreview(
        avg_compensation_women=avg_women,
        avg_compensation_men=avg_men,
        women_sample=len(women),
        men_sample=len(men),
        pay_gap_percentage=gap,
        has_significant_gap=gap > significance_threshold,
        by_tier=tuple(by_tier),
    )
