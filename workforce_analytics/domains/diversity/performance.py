"""Ordinal performance label from leadership gender share, disability share and quota status."""

from workforce_analytics.config import PerformanceThresholds
from workforce_analytics.domains.diversity.models import PerformanceClassification
from workforce_analytics.utils.types import PerformanceLabel


def classify_performance(
    leadership_women_pct: float,
    disability_pct: float,
    quota_compliant: bool,
    thresholds: PerformanceThresholds,
) -> PerformanceClassification:
    """First matching rule wins: Critical, Needs attention, Good, then Excellent."""
    t = thresholds
    match (leadership_women_pct, disability_pct, bool(quota_compliant)):
        case (_, _, False):
            return PerformanceClassification(
                PerformanceLabel.CRITICAL, ("Disability quota not met",)
            )
        case (women, _, _) if women < t.critical_leadership_women:
            return PerformanceClassification(
                PerformanceLabel.CRITICAL,
                (f"Women in leadership below {t.critical_leadership_women:g}%",),
            )
        case (women, disability, _) if women < t.attention_leadership_women or disability < t.attention_disability:
            return PerformanceClassification(
                PerformanceLabel.NEEDS_ATTENTION,
                _reasons(women, disability, t.attention_leadership_women, t.attention_disability),
            )
        case (women, disability, _) if women < t.good_leadership_women or disability < t.good_disability:
            return PerformanceClassification(
                PerformanceLabel.GOOD,
                _reasons(women, disability, t.good_leadership_women, t.good_disability),
            )
        case _:
            return PerformanceClassification(PerformanceLabel.EXCELLENT, ())


def _reasons(women: float, disability: float, women_floor: float, disability_floor: float) -> tuple[str, ...]:
    reasons = []
    if women < women_floor:
        reasons.append(f"Women in leadership below {women_floor:g}%")
    if disability < disability_floor:
        reasons.append(f"Employees with disability below {disability_floor:g}%")
    return tuple(reasons)
