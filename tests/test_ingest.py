"""Tests for roster filtering, snapshot lookup and the CSV providers."""

from datetime import date

import pandas as pd

from conftest import POSITIONS, employee
from workforce_analytics.domains.diversity.ingest import (
    CsvEmployeeProvider,
    CsvPositionProvider,
    CsvSnapshotProvider,
    FrameSnapshotProvider,
    filter_active_employees,
    latest_snapshot,
)

SNAPSHOTS = pd.DataFrame({
    "company_id": ["acme", "acme", "acme", "other"],
    "period_end": ["2023-06-30", "2023-12-31", "2024-06-30", "2023-12-31"],
    "diversity_women_percentage": [30.0, 33.0, 36.0, 80.0],
    "diversity_pcd_percentage": [1.0, 1.5, 2.0, 9.0],
})


def test_filter_active_employees() -> None:
    raw = pd.DataFrame([
        employee("1"),
        employee("2", status="ACTIVE"),
        employee("3", status="Desligado"),
        employee("4", company_id="other"),
        employee("5", status=" ativo "),
    ])
    active = filter_active_employees(raw, "acme")
    assert active["id"].tolist() == ["1", "2", "5"]


def test_filter_passes_frames_without_status_or_company() -> None:
    raw = pd.DataFrame({"id": ["1", "2"]})
    assert len(filter_active_employees(raw, "acme")) == 2


def test_latest_snapshot_respects_cutoff() -> None:
    snapshot = latest_snapshot(SNAPSHOTS, "acme", date(2024, 1, 1))
    assert snapshot.period_end == date(2023, 12, 31)
    assert snapshot.women_percentage == 33.0
    assert snapshot.disability_percentage == 1.5

    assert latest_snapshot(SNAPSHOTS, "acme", date(2024, 12, 31)).period_end == date(2024, 6, 30)
    assert latest_snapshot(SNAPSHOTS, "acme", date(2023, 1, 1)) is None
    assert latest_snapshot(SNAPSHOTS, "missing", date(2024, 12, 31)) is None


def test_frame_snapshot_provider_without_history() -> None:
    assert FrameSnapshotProvider().fetch_latest_snapshot("acme", date(2024, 1, 1)) is None


def test_csv_providers(tmp_path) -> None:
    employees_path = tmp_path / "employees.csv"
    positions_path = tmp_path / "positions.csv"
    snapshots_path = tmp_path / "snapshots.csv"
    pd.DataFrame([employee("1"), employee("2", status="Inativo"), employee("3")]).to_csv(employees_path, index=False)
    pd.DataFrame(POSITIONS).to_csv(positions_path, index=False)
    SNAPSHOTS.to_csv(snapshots_path, index=False)

    active = CsvEmployeeProvider(employees_path).fetch_active_employees("acme")
    assert len(active) == 2

    positions = CsvPositionProvider(positions_path).fetch_positions()
    assert len(positions) == len(POSITIONS)

    snapshot = CsvSnapshotProvider(snapshots_path).fetch_latest_snapshot("acme", date(2024, 1, 1))
    assert snapshot.women_percentage == 33.0


def test_csv_employee_directory(tmp_path) -> None:
    exports = tmp_path / "exports"
    exports.mkdir()
    pd.DataFrame([employee("1"), employee("2")]).to_csv(exports / "2024-01.csv", index=False)
    pd.DataFrame([employee("3")]).to_csv(exports / "2024-02.csv", index=False)

    active = CsvEmployeeProvider(exports).fetch_active_employees("acme")
    assert len(active) == 3


def test_latin1_export_is_decoded(tmp_path) -> None:
    path = tmp_path / "employees.csv"
    pd.DataFrame([employee("1", department="Operações")]).to_csv(path, index=False, encoding="latin-1")
    active = CsvEmployeeProvider(path).fetch_active_employees("acme")
    assert active["department"].tolist() == ["Operações"]


def test_missing_snapshot_file_means_no_history(tmp_path) -> None:
    assert CsvSnapshotProvider(tmp_path / "nope.csv").fetch_latest_snapshot("acme", date(2024, 1, 1)) is None
    assert CsvSnapshotProvider(None).fetch_latest_snapshot("acme", date(2024, 1, 1)) is None


def test_numeric_company_ids_with_blanks(tmp_path) -> None:
    path = tmp_path / "employees.csv"
    pd.DataFrame([
        employee("1", company_id=7),
        employee("2", company_id=None),
        employee("3", company_id=7),
        employee("4", company_id=8),
    ]).to_csv(path, index=False)

    active = CsvEmployeeProvider(path).fetch_active_employees("7")
    assert active["id"].tolist() == [1, 3]
