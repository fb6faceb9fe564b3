"""Tests for employee, position and snapshot normalization."""

import logging
import math

import pandas as pd

from workforce_analytics.domains.diversity.transform import (
    UNSPECIFIED_DEPARTMENT,
    attach_position_titles,
    normalize_employee_records,
    normalize_positions,
    normalize_snapshots,
)


def test_gender_and_ethnicity_are_canonicalized() -> None:
    raw = pd.DataFrame({
        "id": [1, 2, 3, 4, 5],
        "gender": ["Feminino", "MASCULINO", "Outro", None, "female"],
        "ethnicity": ["Preta", "Branco", "Indígena", "Não declarado", None],
    })
    out = normalize_employee_records(raw)
    assert out["gender"].tolist() == ["female", "male", "other", "unknown", "female"]
    assert out["ethnicity"].tolist() == ["black", "white", "indigenous", "not_declared", "unknown"]
    assert out["employee_id"].tolist() == ["1", "2", "3", "4", "5"]


def test_unrecognized_values_are_unknown_with_warning(caplog) -> None:
    raw = pd.DataFrame({"id": ["a", "b"], "gender": ["X", "X"], "ethnicity": ["Latino", "Pardo"]})
    with caplog.at_level(logging.WARNING):
        out = normalize_employee_records(raw)
    assert out["gender"].tolist() == ["unknown", "unknown"]
    assert out["ethnicity"].tolist() == ["unknown", "brown"]
    assert "Unknown gender value" in caplog.text
    assert "Unknown ethnicity value" in caplog.text


def test_missing_department_defaults_to_unspecified() -> None:
    raw = pd.DataFrame({"id": ["1", "2", "3"], "department": ["  Vendas ", None, ""]})
    out = normalize_employee_records(raw)
    assert out["department"].tolist() == ["Vendas", UNSPECIFIED_DEPARTMENT, UNSPECIFIED_DEPARTMENT]


def test_missing_columns_are_filled() -> None:
    out = normalize_employee_records(pd.DataFrame({"id": ["1"]}))
    row = out.iloc[0]
    assert row["gender"] == "unknown"
    assert row["ethnicity"] == "unknown"
    assert not row["has_disability"]
    assert row["department"] == UNSPECIFIED_DEPARTMENT
    assert math.isnan(row["compensation"])


def test_disability_flags_and_compensation_parsing() -> None:
    raw = pd.DataFrame({
        "id": ["1", "2", "3", "4"],
        "is_pcd": [True, "sim", "false", None],
        "salary": ["R$ 5.250,00", "$4,100.50", 3000, None],
    })
    out = normalize_employee_records(raw)
    assert out["has_disability"].tolist() == [True, True, False, False]
    assert out["compensation"].iloc[0] == 5250.0
    assert out["compensation"].iloc[1] == 4100.5
    assert out["compensation"].iloc[2] == 3000.0
    assert math.isnan(out["compensation"].iloc[3])


def test_attach_position_titles_handles_missing_references(caplog) -> None:
    employees = normalize_employee_records(pd.DataFrame({"id": ["1", "2", "3"], "position_id": [10, None, 99]}))
    positions = normalize_positions(pd.DataFrame({"id": [10, 11], "title": ["Gerente", "Analista"]}))
    with caplog.at_level(logging.WARNING):
        out = attach_position_titles(employees, positions)
    assert out["position_title"].tolist() == ["Gerente", "", ""]
    assert "unknown positions" in caplog.text


def test_normalize_positions_deduplicates() -> None:
    positions = normalize_positions(pd.DataFrame({
        "id": ["p1", "p1", None],
        "title": ["Old", "New", "Orphan"],
    }))
    assert positions["position_id"].tolist() == ["p1"]
    assert positions["title"].tolist() == ["New"]


def test_normalize_snapshots_maps_legacy_columns() -> None:
    raw = pd.DataFrame({
        "company_id": ["acme", "acme"],
        "period_end": ["2024-12-31", "not a date"],
        "diversity_women_percentage": [41.5, 40.0],
        "diversity_pcd_percentage": [3.2, None],
    })
    out = normalize_snapshots(raw)
    assert len(out) == 1
    assert out["women_percentage"].iloc[0] == 41.5
    assert out["disability_percentage"].iloc[0] == 3.2


def test_numeric_disability_flags() -> None:
    raw = pd.DataFrame({"id": ["1", "2", "3", "4"], "is_pcd": [1.0, 0.0, None, 1.0]})
    assert raw["is_pcd"].dtype == "float64"
    out = normalize_employee_records(raw)
    assert out["has_disability"].tolist() == [True, False, False, True]


def test_dot_grouped_amounts_are_whole_numbers() -> None:
    raw = pd.DataFrame({
        "id": ["1", "2", "3", "4", "5"],
        "salary": ["R$ 5.250", "12.500", "1.234.567", "5.25", "R$ 1.234.567,89"],
    })
    out = normalize_employee_records(raw)
    assert out["compensation"].tolist() == [5250.0, 12500.0, 1234567.0, 5.25, 1234567.89]
