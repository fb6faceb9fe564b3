"""Data providers for employee rosters, position catalogs and prior-period snapshots.

The engine only depends on the three provider protocols. DataFrame-backed
providers serve embedding callers and tests; CSV-backed providers read HRIS
exports (Workday, BambooHR, Supabase dumps) from disk on every fetch.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Protocol

import pandas as pd

from workforce_analytics.domains.diversity.models import HistoricalSnapshot, snapshot_schema
from workforce_analytics.domains.diversity.transform import clean_id, normalize_snapshots
from workforce_analytics.utils.io import read_table
from workforce_analytics.utils.transforms import fold_text, normalize_columns
from workforce_analytics.utils.validators import validate_dataframe

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = {"ativo", "active"}


class EmployeeProvider(Protocol):
    def fetch_active_employees(self, company_id: str) -> pd.DataFrame: ...


class PositionProvider(Protocol):
    def fetch_positions(self) -> pd.DataFrame: ...


class SnapshotProvider(Protocol):
    def fetch_latest_snapshot(self, company_id: str, on_or_before: date) -> HistoricalSnapshot | None: ...


def filter_active_employees(raw: pd.DataFrame, company_id: str) -> pd.DataFrame:
    """Keep the company's active employees; frames without those columns pass through."""
    df = normalize_columns(raw)
    if "company_id" in df.columns:
        df = df[df["company_id"].map(clean_id) == clean_id(company_id)]
    if "status" in df.columns:
        df = df[df["status"].map(fold_text).isin(ACTIVE_STATUSES)]
    return df.reset_index(drop=True)


def latest_snapshot(raw: pd.DataFrame, company_id: str, on_or_before: date) -> HistoricalSnapshot | None:
    """Most recent snapshot for the company whose period ends on or before the cutoff."""
    if raw.empty:
        return None
    snapshots = normalize_snapshots(raw)
    outcome = validate_dataframe(snapshots, snapshot_schema)
    if not outcome["valid"]:
        logger.warning("Snapshot data failed %d schema checks: %s", len(outcome["errors"]), outcome["errors"][:5])
    eligible = snapshots[
        (snapshots["company_id"] == clean_id(company_id))
        & (snapshots["period_end"] <= pd.Timestamp(on_or_before))
    ]
    if eligible.empty:
        return None

    row = eligible.sort_values("period_end", ascending=False).iloc[0]
    return HistoricalSnapshot(
        period_end=row["period_end"].date(),
        women_percentage=float(row["women_percentage"]),
        disability_percentage=float(row["disability_percentage"]),
    )


class FrameEmployeeProvider:
    def __init__(self, employees: pd.DataFrame):
        self.employees = employees

    def fetch_active_employees(self, company_id: str) -> pd.DataFrame:
        return filter_active_employees(self.employees, company_id)


class FramePositionProvider:
    def __init__(self, positions: pd.DataFrame):
        self.positions = positions

    def fetch_positions(self) -> pd.DataFrame:
        return self.positions.copy()


class FrameSnapshotProvider:
    def __init__(self, snapshots: pd.DataFrame | None = None):
        self.snapshots = snapshots if snapshots is not None else pd.DataFrame()

    def fetch_latest_snapshot(self, company_id: str, on_or_before: date) -> HistoricalSnapshot | None:
        return latest_snapshot(self.snapshots, company_id, on_or_before)


class CsvEmployeeProvider:
    """Employees from a CSV export, or every ``*.csv`` in an export directory."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def fetch_active_employees(self, company_id: str) -> pd.DataFrame:
        raw = read_table(self.path)
        active = filter_active_employees(raw, company_id)
        logger.info("Read %d rows from %s, %d active for company %s", len(raw), self.path, len(active), company_id)
        return active


class CsvPositionProvider:
    def __init__(self, path: str | Path):
        self.path = Path(path)

    def fetch_positions(self) -> pd.DataFrame:
        positions = read_table(self.path)
        logger.info("Read %d positions from %s", len(positions), self.path)
        return positions


class CsvSnapshotProvider:
    """Prior-period snapshots from CSV; a missing file means no history."""

    def __init__(self, path: str | Path | None):
        self.path = Path(path) if path is not None else None

    def fetch_latest_snapshot(self, company_id: str, on_or_before: date) -> HistoricalSnapshot | None:
        if self.path is None or not self.path.exists():
            logger.info("No snapshot history available at %s", self.path)
            return None
        return latest_snapshot(read_table(self.path), company_id, on_or_before)
