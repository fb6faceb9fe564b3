"""Leadership pipeline: how representation changes from the base tier to the top."""

import logging

import numpy as np

from workforce_analytics.config import TierCatalog
from workforce_analytics.domains.diversity.models import (
    FunnelStage,
    PipelineAnalysis,
    TierBreakdown,
)

logger = logging.getLogger(__name__)


def _mean_or_zero(values: list[float]) -> float:
    return float(np.mean(values)) if values else 0.0


def analyze_pipeline(tiers: list[TierBreakdown], catalog: TierCatalog) -> PipelineAnalysis:
    """Compare the base tier against the average of the populated leadership tiers.

    ``gap = base_pct - leadership_avg``; a positive gap means the group thins
    out towards the top. An unpopulated base tier contributes 0, and so does an
    organization with no populated leadership tier.
    """
    by_name = {t.tier: t for t in tiers}
    base = by_name.get(catalog.base_tier)
    leadership = [by_name[name] for name in catalog.leadership_tiers if name in by_name]

    base_women = base.women_percentage if base else 0.0
    base_disability = base.disability_percentage if base else 0.0
    base_minorities = base.minorities_percentage if base else 0.0

    women_avg = _mean_or_zero([t.women_percentage for t in leadership])
    disability_avg = _mean_or_zero([t.disability_percentage for t in leadership])
    minorities_avg = _mean_or_zero([t.minorities_percentage for t in leadership])

    funnel = tuple(
        FunnelStage(
            tier=t.tier,
            rank=t.rank,
            women_percentage=t.women_percentage,
            disability_percentage=t.disability_percentage,
            minorities_percentage=t.minorities_percentage,
        )
        for t in sorted(tiers, key=lambda t: t.rank)
    )

    if not leadership:
        logger.warning("No leadership tier populated; leadership averages default to 0")

    return PipelineAnalysis(
        base_tier=catalog.base_tier,
        leadership_tiers=tuple(t.tier for t in leadership),
        leadership_women_average=women_avg,
        leadership_disability_average=disability_avg,
        leadership_minorities_average=minorities_avg,
        leadership_diversity_gap=base_women - women_avg,
        gender_gap_top_vs_base=base_women - women_avg,
        disability_gap_top_vs_base=base_disability - disability_avg,
        ethnicity_gap_top_vs_base=base_minorities - minorities_avg,
        funnel=funnel,
    )
