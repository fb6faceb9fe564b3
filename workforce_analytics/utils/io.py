"""File I/O utilities for reading HRIS exports and writing analytics output."""

import json
import tomllib
from pathlib import Path

import pandas as pd
from rich.console import Console

type FilePath = str | Path

console = Console(stderr=True)

EXPORT_ENCODINGS = ("utf-8", "latin-1", "cp1252")


def read_csv_export(path: FilePath, **kwargs) -> pd.DataFrame:
    """Read a single HRIS CSV export, handling encoding quirks."""
    path = Path(path)
    for encoding in EXPORT_ENCODINGS:
        try:
            return pd.read_csv(path, encoding=encoding, **kwargs)
        except UnicodeDecodeError:
            continue
    raise ValueError(f"Could not decode {path}")


def read_csv_files(directory: FilePath, pattern: str = "*.csv", **kwargs) -> pd.DataFrame:
    """Read all CSV files matching ``pattern`` from a directory and concatenate them."""
    directory = Path(directory)
    chunks = []
    for csv_file in sorted(directory.glob(pattern)):
        console.print(f"  Reading {csv_file.name}...")
        chunks.append(read_csv_export(csv_file, **kwargs))

    if not chunks:
        return pd.DataFrame()
    return pd.concat(chunks, ignore_index=True)


def read_table(path: FilePath, **kwargs) -> pd.DataFrame:
    """Read a CSV file, or every CSV in a directory."""
    path = Path(path)
    if path.is_dir():
        return read_csv_files(path, **kwargs)
    return read_csv_export(path, **kwargs)


def write_output(payload: pd.DataFrame | dict, path: FilePath, fmt: str = "json") -> None:
    """Write a DataFrame or a result dict to the specified format."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    match (fmt, payload):
        case ("json", dict()):
            path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        case ("json", pd.DataFrame()):
            payload.to_json(path, orient="records", indent=2, force_ascii=False)
        case ("csv", pd.DataFrame()):
            payload.to_csv(path, index=False)
        case ("csv", dict()):
            pd.json_normalize(payload).to_csv(path, index=False)
        case (other, _):
            raise ValueError(f"Unsupported output format: {other}")

    console.print(f"  Wrote {fmt} output to {path}")


def load_toml_config(path: FilePath) -> dict:
    """Load a TOML configuration file."""
    with open(path, "rb") as f:
        return tomllib.load(f)
