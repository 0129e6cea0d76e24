"""Text helpers."""

from __future__ import annotations

import re
from typing import Optional

import pandas as pd


ZIP_PATTERN = re.compile(r"(?<!\d)(\d{5})(?!\d)")
COMPLAINT_ID_PATTERN = re.compile(r"\d+(?:[.-]\d+)?")


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace and trim."""
    return re.sub(r"\s+", " ", text).strip()


def clean_column_name(name: object) -> str:
    """Sanitize a column header to snake_case (``"Inspection Date"`` -> ``inspection_date``)."""
    value = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", str(name).strip())
    value = re.sub(r"[^0-9a-zA-Z]+", "_", value)
    return value.strip("_").lower()


def normalize_event_type(value: Optional[str]) -> Optional[str]:
    """Lower-case an inspection type and collapse its whitespace."""
    if value is None:
        return None
    cleaned = normalize_whitespace(value).lower()
    return cleaned or None


def extract_zip(value: Optional[str]) -> Optional[str]:
    """Return the first run of exactly five digits, if any."""
    if not value:
        return None
    match = ZIP_PATTERN.search(value)
    return match.group(1) if match else None


def is_valid_complaint_id(value: Optional[str]) -> bool:
    """Digits, optionally followed by ``.`` or ``-`` and more digits."""
    if not value:
        return False
    return COMPLAINT_ID_PATTERN.fullmatch(value) is not None


def as_text(value: object) -> Optional[str]:
    """Stringify a cell value; blanks and missing markers become ``None``."""
    if value is None or pd.isna(value):
        return None
    text = str(value).strip()
    return text or None
