"""Normalize raw HRIS employee, position and snapshot records."""

import logging
import re

import numpy as np
import pandas as pd

from workforce_analytics.utils.transforms import ensure_columns, fold_text, normalize_columns
from workforce_analytics.utils.types import Ethnicity, Gender

logger = logging.getLogger(__name__)

UNSPECIFIED_DEPARTMENT = "Unspecified"

EMPLOYEE_COLUMN_MAP = {
    "id": "employee_id",
    "name": "full_name",
    "is_pcd": "has_disability",
    "pcd_type": "disability_type",
    "salary": "compensation",
    "base_salary": "compensation",
}

POSITION_COLUMN_MAP = {
    "id": "position_id",
    "position_title": "title",
    "job_title": "title",
}

SNAPSHOT_COLUMN_MAP = {
    "diversity_women_percentage": "women_percentage",
    "diversity_pcd_percentage": "disability_percentage",
}

EMPLOYEE_COLUMNS = [
    "employee_id", "full_name", "gender", "ethnicity", "has_disability",
    "disability_type", "department", "compensation", "status", "position_id",
]

_TRUE_FLAGS = {"true", "t", "1", "yes", "y", "sim", "s"}
_FALSE_FLAGS = {"false", "f", "0", "no", "n", "nao", ""}

_THOUSANDS_DOTS = re.compile(r"-?\d{1,3}(\.\d{3})+")


def _classify_gender(folded: str) -> Gender | None:
    """Map a folded gender string to its canonical value; None when unrecognized."""
    match folded:
        case "feminino" | "female" | "f" | "mulher" | "woman":
            return Gender.FEMALE
        case "masculino" | "male" | "m" | "homem" | "man":
            return Gender.MALE
        case "outro" | "other" | "nao binario" | "nao-binario" | "non-binary" | "nonbinary":
            return Gender.OTHER
        case "" | "unknown" | "nao informado" | "prefiro nao informar":
            return Gender.UNKNOWN
        case _:
            return None


def _classify_ethnicity(folded: str) -> Ethnicity | None:
    """Map a folded race/ethnicity string to its canonical value; None when unrecognized."""
    match folded:
        case "branco" | "branca" | "white":
            return Ethnicity.WHITE
        case "preto" | "preta" | "black":
            return Ethnicity.BLACK
        case "pardo" | "parda" | "brown":
            return Ethnicity.BROWN
        case "amarelo" | "amarela" | "asian":
            return Ethnicity.ASIAN
        case "indigena" | "indigenous":
            return Ethnicity.INDIGENOUS
        case "nao declarado" | "nao declarada" | "not declared" | "not_declared" | "prefiro nao declarar":
            return Ethnicity.NOT_DECLARED
        case "" | "unknown":
            return Ethnicity.UNKNOWN
        case _:
            return None


def _canonicalize(series: pd.Series, classify, fallback, label: str) -> pd.Series:
    """Fold and classify each distinct value once; unrecognized values fall back with a warning."""
    folded = series.map(fold_text)
    mapping = {}
    for value in folded.unique():
        canonical = classify(value)
        if canonical is None:
            logger.warning(
                "Unknown %s value: %r (%d records), treating as %s",
                label, value, int((folded == value).sum()), fallback.value,
            )
            canonical = fallback
        mapping[value] = canonical.value
    return folded.map(mapping)


def _parse_flag(value: object) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    # 0/1 columns with blanks come back from read_csv as float64
    if isinstance(value, (int, float, np.number)):
        return False if pd.isna(value) else bool(value)
    folded = fold_text(value)
    if folded in _TRUE_FLAGS:
        return True
    if folded not in _FALSE_FLAGS:
        logger.warning("Unrecognized disability flag %r, treating as False", value)
    return False


def _parse_amount(value: object) -> float:
    """Parse a compensation amount such as ``R$ 5.250,00`` or ``$5,250.00``."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return float("nan")
    if not isinstance(value, str):
        return float(value)
    cleaned = re.sub(r"[^\d.,-]", "", value)
    if "," in cleaned and ("." not in cleaned or cleaned.rfind(",") > cleaned.rfind(".")):
        # decimal comma
        cleaned = cleaned.replace(".", "").replace(",", ".")
    elif _THOUSANDS_DOTS.fullmatch(cleaned):
        # "5.250" and "1.234.567" are whole amounts with dot grouping
        cleaned = cleaned.replace(".", "")
    else:
        cleaned = cleaned.replace(",", "")
    try:
        return float(cleaned)
    except ValueError:
        logger.warning("Could not parse compensation %r", value)
        return float("nan")


def clean_id(value: object) -> str | None:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


def normalize_employee_records(raw_df: pd.DataFrame) -> pd.DataFrame:
    """Apply all cleaning and normalization steps to raw employee data."""
    df = normalize_columns(raw_df, EMPLOYEE_COLUMN_MAP)
    df = ensure_columns(df, EMPLOYEE_COLUMNS)

    df["employee_id"] = df["employee_id"].map(clean_id)
    df["position_id"] = df["position_id"].map(clean_id)
    df["gender"] = _canonicalize(df["gender"], _classify_gender, Gender.UNKNOWN, "gender")
    df["ethnicity"] = _canonicalize(df["ethnicity"], _classify_ethnicity, Ethnicity.UNKNOWN, "ethnicity")
    df["has_disability"] = df["has_disability"].map(_parse_flag).astype(bool)

    department = df["department"].astype("string").str.strip()
    df["department"] = department.mask(department.isna() | (department == ""), UNSPECIFIED_DEPARTMENT).astype(str)

    df["compensation"] = df["compensation"].map(_parse_amount).astype(float)

    logger.info("Normalized %d employee records", len(df))
    return df


def normalize_positions(raw_df: pd.DataFrame) -> pd.DataFrame:
    """Clean the position catalog to ``position_id``/``title``/``level``."""
    df = normalize_columns(raw_df, POSITION_COLUMN_MAP)
    df = ensure_columns(df, ["position_id", "title", "level"])
    df["position_id"] = df["position_id"].map(clean_id)
    df = df.dropna(subset=["position_id"]).drop_duplicates(subset=["position_id"], keep="last")
    return df[["position_id", "title", "level"]].reset_index(drop=True)


def attach_position_titles(employees: pd.DataFrame, positions: pd.DataFrame) -> pd.DataFrame:
    """Left-join position titles onto employees; a missing reference yields an empty title."""
    titles = positions.set_index("position_id")["title"]
    result = employees.copy()
    result["position_title"] = result["position_id"].map(titles).fillna("").astype(str)

    unmatched = result["position_id"].notna() & ~result["position_id"].isin(titles.index)
    if unmatched.any():
        logger.warning("%d employees reference unknown positions", int(unmatched.sum()))
    return result


def normalize_snapshots(raw_df: pd.DataFrame) -> pd.DataFrame:
    """Clean historical diversity snapshots to company/period/percentages."""
    df = normalize_columns(raw_df, SNAPSHOT_COLUMN_MAP)
    df = ensure_columns(df, ["company_id", "period_end", "women_percentage", "disability_percentage"])
    df["company_id"] = df["company_id"].map(clean_id)
    df["period_end"] = pd.to_datetime(df["period_end"], errors="coerce")
    for col in ("women_percentage", "disability_percentage"):
        df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0.0)
    return df.dropna(subset=["period_end"]).reset_index(drop=True)
