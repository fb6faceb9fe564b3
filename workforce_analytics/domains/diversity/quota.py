"""Disability hiring quota (e.g. Lei 8.213/91) evaluation."""

import logging
import math

from workforce_analytics.config import QuotaTable
from workforce_analytics.domains.diversity.models import QuotaCompliance
from workforce_analytics.utils.types import safe_percentage

logger = logging.getLogger(__name__)


def evaluate_quota(total_employees: int, disability_count: int, table: QuotaTable) -> QuotaCompliance:
    """Check the disability share against the bracket for this headcount."""
    required = table.required_percentage(total_employees)
    current = safe_percentage(disability_count, total_employees)

    # compare on counts so float rounding of the percentages cannot flip the result
    is_compliant = disability_count * 100 >= required * total_employees
    missing = 0
    if not is_compliant:
        missing = math.ceil(required * total_employees / 100 - disability_count)
        logger.warning(
            "Quota %s not met: %.2f%% < %.2f%% required (%d hires missing)",
            table.name, current, required, missing,
        )

    return QuotaCompliance(
        regime=table.name,
        total_employees=total_employees,
        disability_count=disability_count,
        required_percentage=required,
        current_percentage=current,
        is_applicable=required > 0,
        is_compliant=is_compliant,
        missing_hires=missing,
    )
