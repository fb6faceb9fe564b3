"""Common data transformation utilities."""

import unicodedata

import pandas as pd

type ColumnMapping = dict[str, str]


def normalize_columns(df: pd.DataFrame, mapping: ColumnMapping | None = None) -> pd.DataFrame:
    """Normalize column names to snake_case and apply optional mapping."""
    df = df.copy()
    df.columns = [str(col).strip().lower().replace(" ", "_").replace("-", "_") for col in df.columns]

    if mapping:
        df = df.rename(columns=mapping)

    return df


def ensure_columns(df: pd.DataFrame, columns: list[str]) -> pd.DataFrame:
    """Add any missing columns as nulls so downstream code can rely on them."""
    missing = [col for col in columns if col not in df.columns]
    if not missing:
        return df
    df = df.copy()
    for col in missing:
        df[col] = None
    return df


def fold_text(value: object) -> str:
    """Lowercase a value and strip accents; nulls become the empty string."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    decomposed = unicodedata.normalize("NFKD", str(value).strip().lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))
