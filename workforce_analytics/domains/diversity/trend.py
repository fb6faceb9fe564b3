"""Period-over-period comparison against a stored diversity snapshot."""

import logging
from datetime import date

import pandas as pd

from workforce_analytics.domains.diversity.models import HistoricalSnapshot, TrendComparison

logger = logging.getLogger(__name__)


def snapshot_cutoff(period_start: date, lookback_months: int = 12) -> date:
    """Latest period end a prior snapshot may have: ``period_start`` minus the lookback."""
    return (pd.Timestamp(period_start) - pd.DateOffset(months=lookback_months)).date()


def compare_with_snapshot(
    women_pct: float,
    disability_pct: float,
    snapshot: HistoricalSnapshot | None,
) -> TrendComparison:
    """Signed changes since the snapshot; without one, the baseline is zero."""
    if snapshot is None:
        logger.info("No prior snapshot found; comparing against a zero baseline")
        previous_women, previous_disability, previous_end = 0.0, 0.0, None
    else:
        previous_women = snapshot.women_percentage
        previous_disability = snapshot.disability_percentage
        previous_end = snapshot.period_end

    change_women = women_pct - previous_women
    return TrendComparison(
        has_baseline=snapshot is not None,
        previous_period_end=previous_end,
        previous_women_percentage=previous_women,
        change_women_percentage=change_women,
        previous_disability_percentage=previous_disability,
        change_disability_percentage=disability_pct - previous_disability,
        is_improving=change_women > 0,
    )
