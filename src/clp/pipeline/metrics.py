"""Resolution metrics and monthly summaries."""

from __future__ import annotations

from dataclasses import dataclass, field

import pandas as pd

from clp.models import AnalysisParams, LabelCatalogue
from clp.pipeline.aggregate import category_dates, earliest, latest, zip_column
from clp.utils.logging import get_logger
from clp.utils.numbers import percentage, round_half_away
from clp.utils.time import as_timestamp, to_month


logger = get_logger(__name__)

REMOVED_MISSING_COMPLAINT_DATE = "missing_complaint_date"
REMOVED_BEFORE_METRICS_START = "before_metrics_start"
REMOVED_END_PRECEDES_START = "end_precedes_start"
NOTED_NO_END_DATE = "no_end_date"
NOTED_MULTIPLE_ZIP = "multiple_zip_codes"

DAYS_TO_RESOLUTION_COLUMNS: tuple[str, ...] = (
    "month_resolved",
    "mean_days_to_resolution",
    "n_resolved",
)
RESOLUTION_STATUS_COLUMNS: tuple[str, ...] = (
    "month_started",
    "n_resolved",
    "pct_resolved",
    "n_unresolved",
    "pct_unresolved",
    "n_total",
)


@dataclass
class MetricsResult:
    records: pd.DataFrame
    days_to_resolution: pd.DataFrame
    resolution_status: pd.DataFrame
    removed: dict[str, int] = field(default_factory=dict)
    noted: dict[str, int] = field(default_factory=dict)


def derive_dates(
    lifecycles: pd.DataFrame, labels: LabelCatalogue, params: AnalysisParams
) -> pd.DataFrame:
    """Attach ``start_date`` and ``end_date`` to each lifecycle record."""
    df = lifecycles.copy()
    df["start_date"] = earliest(category_dates(lifecycles, labels, [params.start_category]))
    df["end_date"] = latest(category_dates(lifecycles, labels, params.terminal_categories))
    return df


def add_resolution_fields(records: pd.DataFrame) -> pd.DataFrame:
    df = records.copy()
    df["resolution_days"] = (df["end_date"] - df["start_date"]).dt.days.astype("Int64")
    df["month_started"] = to_month(df["start_date"])
    df["month_resolved"] = to_month(df["end_date"])
    return df


def summarize_days_to_resolution(records: pd.DataFrame) -> pd.DataFrame:
    """Mean days to resolution per month resolved."""
    resolved = records.loc[records["resolution_days"].notna()]
    rows = []
    for month, group in resolved.groupby("month_resolved", sort=True):
        days = group["resolution_days"].astype(float)
        rows.append(
            {
                "month_resolved": month,
                "mean_days_to_resolution": round_half_away(days.mean(), 1),
                "n_resolved": len(group),
            }
        )
    return pd.DataFrame(rows, columns=list(DAYS_TO_RESOLUTION_COLUMNS))


def status_row(month: str, n_resolved: int, n_unresolved: int) -> dict[str, object]:
    """Resolution status for one month; percentages are ``None`` for an empty month."""
    n_total = n_resolved + n_unresolved
    pct_resolved = percentage(n_resolved, n_total)
    pct_unresolved = None if pct_resolved is None else round_half_away(100.0 - pct_resolved, 1)
    return {
        "month_started": month,
        "n_resolved": n_resolved,
        "pct_resolved": pct_resolved,
        "n_unresolved": n_unresolved,
        "pct_unresolved": pct_unresolved,
        "n_total": n_total,
    }


def summarize_resolution_status(records: pd.DataFrame) -> pd.DataFrame:
    """Resolved/unresolved split per month started."""
    rows = []
    for month, group in records.groupby("month_started", sort=True):
        n_resolved = int(group["end_date"].notna().sum())
        rows.append(status_row(month, n_resolved, len(group) - n_resolved))
    return pd.DataFrame(rows, columns=list(RESOLUTION_STATUS_COLUMNS))


def compute_metrics(
    lifecycles: pd.DataFrame, labels: LabelCatalogue, params: AnalysisParams
) -> MetricsResult:
    """Filter lifecycle records and compute both monthly summaries."""
    df = derive_dates(lifecycles, labels, params)
    removed: dict[str, int] = {}

    no_start = df["start_date"].isna()
    removed[REMOVED_MISSING_COMPLAINT_DATE] = int(no_start.sum())
    df = df.loc[~no_start]

    early = df["start_date"] < as_timestamp(params.metrics_start_date)
    removed[REMOVED_BEFORE_METRICS_START] = int(early.sum())
    df = df.loc[~early]

    reversed_order = df["end_date"].notna() & (df["end_date"] < df["start_date"])
    removed[REMOVED_END_PRECEDES_START] = int(reversed_order.sum())
    df = df.loc[~reversed_order]

    records = add_resolution_fields(df).reset_index(drop=True)

    noted = {
        NOTED_NO_END_DATE: int(records["end_date"].isna().sum()),
        NOTED_MULTIPLE_ZIP: int(records[zip_column(2)].notna().sum())
        if zip_column(2) in records.columns
        else 0,
    }

    result = MetricsResult(
        records=records,
        days_to_resolution=summarize_days_to_resolution(records),
        resolution_status=summarize_resolution_status(records),
        removed=removed,
        noted=noted,
    )
    logger.info(
        "metrics.complete records=%s months_resolved=%s months_started=%s removed=%s noted=%s",
        len(records),
        len(result.days_to_resolution),
        len(result.resolution_status),
        removed,
        noted,
    )
    return result
