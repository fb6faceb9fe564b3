"""Roster validation helpers built on pandera."""

import pandas as pd
from pandera.errors import SchemaErrors
from pandera.pandas import DataFrameSchema

type ValidationResult = dict[str, str | bool | list[str]]


def validate_dataframe(df: pd.DataFrame, schema: DataFrameSchema) -> ValidationResult:
    """Validate lazily and summarize failures as one line per column and check.

    HRIS exports fail the same check on many rows at once, so each line carries
    the row count and a few distinct offending values instead of every case.
    """
    try:
        schema.validate(df, lazy=True)
    except SchemaErrors as e:
        errors = []
        grouped = e.failure_cases.groupby(["column", "check"], dropna=False, sort=False)["failure_case"]
        for (column, check), cases in grouped:
            sample = ", ".join(repr(v) for v in cases.drop_duplicates().head(3))
            errors.append(f"Column '{column}' failed '{check}' on {len(cases)} rows (e.g. {sample})")
        return {"valid": False, "status": "error", "errors": errors}
    return {"valid": True, "status": "ok", "errors": []}


def validate_unique(df: pd.DataFrame, columns: list[str]) -> ValidationResult:
    """Check that ``columns`` form a unique key, reporting a sample of repeated keys."""
    repeated = df.loc[df.duplicated(subset=columns, keep=False), columns]

    match len(repeated):
        case 0:
            return {"valid": True, "status": "ok", "errors": []}
        case n:
            sample = repeated.drop_duplicates().head(5).to_dict("records")
            return {
                "valid": False,
                "status": "error",
                "errors": [f"{n} rows share a key on {columns}, e.g. {sample}"],
            }
