"""Date helpers."""

from __future__ import annotations

from datetime import date
from typing import Optional

import pandas as pd


def to_calendar_date(value: object) -> pd.Timestamp:
    """Parse one cell to a naive midnight timestamp, keeping the local calendar day.

    Offsets are dropped without converting to UTC, so ``2023-03-01T23:30-05:00``
    stays on 2023-03-01. Unparseable values become NaT.
    """
    parsed = pd.to_datetime(value, errors="coerce")
    if parsed is pd.NaT or pd.isna(parsed):
        return pd.NaT
    if parsed.tzinfo is not None:
        parsed = parsed.tz_localize(None)
    return parsed.normalize()


def to_calendar_dates(values: pd.Series) -> pd.Series:
    """Parse values to midnight timestamps; unparseable values become NaT."""
    return pd.Series(
        [to_calendar_date(value) for value in values],
        index=values.index,
        dtype="datetime64[ns]",
    )


def to_month(values: pd.Series) -> pd.Series:
    """Truncate dates to a ``YYYY-MM`` label (missing stays missing)."""
    return values.dt.strftime("%Y-%m")


def as_timestamp(value: Optional[date]) -> Optional[pd.Timestamp]:
    """Convert a configuration date into a comparable timestamp."""
    if value is None:
        return None
    return pd.Timestamp(value)
