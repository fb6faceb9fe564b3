"""Tests for the ordinal performance label."""

import numpy as np
import pytest

from workforce_analytics.config import PerformanceThresholds
from workforce_analytics.domains.diversity.performance import classify_performance
from workforce_analytics.utils.types import PerformanceLabel

THRESHOLDS = PerformanceThresholds()


@pytest.mark.parametrize(
    ("women", "disability", "quota_ok", "expected"),
    [
        (50.0, 10.0, False, PerformanceLabel.CRITICAL),
        (10.0, 10.0, True, PerformanceLabel.CRITICAL),
        (20.0, 10.0, True, PerformanceLabel.NEEDS_ATTENTION),
        (40.0, 1.0, True, PerformanceLabel.NEEDS_ATTENTION),
        (30.0, 10.0, True, PerformanceLabel.GOOD),
        (40.0, 3.0, True, PerformanceLabel.GOOD),
        (35.0, 4.0, True, PerformanceLabel.EXCELLENT),
        (60.0, 12.0, True, PerformanceLabel.EXCELLENT),
    ],
)
def test_decision_table(women, disability, quota_ok, expected) -> None:
    assert classify_performance(women, disability, quota_ok, THRESHOLDS).label is expected


def test_quota_failure_overrides_everything() -> None:
    result = classify_performance(90.0, 50.0, False, THRESHOLDS)
    assert result.label is PerformanceLabel.CRITICAL
    assert result.reasons == ("Disability quota not met",)


def test_reasons_name_each_shortfall() -> None:
    result = classify_performance(20.0, 1.0, True, THRESHOLDS)
    assert result.reasons == (
        "Women in leadership below 25%",
        "Employees with disability below 2%",
    )
    assert classify_performance(60.0, 12.0, True, THRESHOLDS).reasons == ()


def test_numpy_bool_quota_flag() -> None:
    assert classify_performance(60.0, 12.0, np.bool_(False), THRESHOLDS).label is PerformanceLabel.CRITICAL


def test_custom_thresholds() -> None:
    lenient = PerformanceThresholds(5, 10, 1, 20, 2)
    assert classify_performance(20.0, 2.0, True, lenient).label is PerformanceLabel.EXCELLENT
