"""Tests for GRI 405-1 reporting compliance."""

import pytest

from conftest import employee
from workforce_analytics.config import ComplianceThresholds
from workforce_analytics.domains.diversity.compliance import (
    check_reporting_compliance,
    data_completeness,
)
from workforce_analytics.utils.types import DataQuality

THRESHOLDS = ComplianceThresholds()


def test_completeness_of_mixed_roster(make_roster, mixed_records) -> None:
    gender_pct, ethnicity_pct = data_completeness(make_roster(mixed_records))
    assert gender_pct == pytest.approx(90.0)
    assert ethnicity_pct == pytest.approx(80.0)


def test_mixed_roster_fails_on_ethnicity_only(make_roster, mixed_records) -> None:
    result = check_reporting_compliance(make_roster(mixed_records), 6, THRESHOLDS)
    assert not result.is_compliant
    assert not result.breakdown_complete
    assert result.missing_data == ("Incomplete ethnicity data (80.0%)",)
    assert len(result.recommendations) == 1
    assert result.data_quality is DataQuality.LOW


def test_mostly_undeclared_ethnicity(make_roster) -> None:
    records = [employee(str(i), ethnicity=None) for i in range(950)]
    records += [employee(str(i), ethnicity="Branco") for i in range(950, 1000)]
    result = check_reporting_compliance(make_roster(records), 3, THRESHOLDS)
    assert result.ethnicity_completeness == pytest.approx(5.0)
    assert not result.is_compliant
    assert "Incomplete ethnicity data (5.0%)" in result.missing_data
    assert any("ethnicity" in r for r in result.recommendations)


def test_too_few_tiers(make_roster) -> None:
    records = [employee(str(i), ethnicity="Pardo") for i in range(10)]
    result = check_reporting_compliance(make_roster(records), 1, THRESHOLDS)
    assert result.breakdown_complete
    assert not result.is_compliant
    assert result.missing_data == ("Limited hierarchy structure (1 of 3 required levels populated)",)
    assert result.recommendations == ("Define clear hierarchy levels in the organizational structure",)


def test_complete_data_is_compliant(make_roster) -> None:
    records = [employee(str(i), gender=["Feminino", "Masculino"][i % 2], ethnicity="Preto") for i in range(20)]
    result = check_reporting_compliance(make_roster(records), 4, THRESHOLDS)
    assert result.is_compliant
    assert result.missing_data == ()
    assert result.recommendations == ()
    assert result.data_quality is DataQuality.HIGH


def test_every_failure_pairs_with_a_recommendation(make_roster) -> None:
    records = [employee(str(i), gender=None, ethnicity=None) for i in range(5)]
    result = check_reporting_compliance(make_roster(records), 1, THRESHOLDS)
    assert len(result.missing_data) == 3
    assert len(result.recommendations) == len(result.missing_data)
    assert result.data_quality is DataQuality.UNKNOWN
