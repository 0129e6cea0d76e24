"""Inspection history reader."""

from __future__ import annotations

from pathlib import Path
from typing import Union

import pandas as pd

from clp.errors import InputReadError, MissingColumnsError
from clp.utils.logging import get_logger
from clp.utils.text import clean_column_name


logger = get_logger(__name__)

# Sanitized source column -> pipeline column.
COLUMN_MAP: dict[str, str] = {
    "id": "event_id",
    "complaint_id": "complaint_id",
    "inspection_type": "event_type",
    "inspection_date": "event_date",
    "property_zip_code": "zip_code",
}

EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}


def clean_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy with snake_case column names."""
    renamed = df.copy()
    renamed.columns = [clean_column_name(col) for col in df.columns]
    return renamed


def select_required_columns(df: pd.DataFrame, source: str = "input") -> pd.DataFrame:
    """Sanitize headers, enforce required columns and rename to pipeline names."""
    cleaned = clean_columns(df)
    missing = [col for col in COLUMN_MAP if col not in cleaned.columns]
    if missing:
        raise MissingColumnsError(missing, source=source)

    duplicated = cleaned.columns[cleaned.columns.duplicated()].tolist()
    clashing = [col for col in duplicated if col in COLUMN_MAP]
    if clashing:
        raise InputReadError(f"{source}: ambiguous column name(s) after sanitizing: {clashing}")

    return cleaned[list(COLUMN_MAP)].rename(columns=COLUMN_MAP)


def load_inspections(path: Union[str, Path], sheet: Union[int, str] = 0) -> pd.DataFrame:
    """Load the raw inspection table from a CSV or Excel file."""
    path = Path(path)
    if not path.exists():
        raise InputReadError(f"Input file not found: {path}")

    suffix = path.suffix.lower()
    try:
        if suffix in EXCEL_SUFFIXES:
            df = pd.read_excel(path, sheet_name=sheet, dtype=str)
        elif suffix == ".csv":
            df = pd.read_csv(path, dtype=str, keep_default_na=True)
        else:
            raise InputReadError(f"Unsupported input format {suffix!r}: {path}")
    except InputReadError:
        raise
    except Exception as exc:
        raise InputReadError(f"Failed to read {path}: {exc}") from exc

    logger.info("reader.loaded path=%s rows=%s columns=%s", path.name, len(df), len(df.columns))
    return select_required_columns(df, source=path.name)
