"""Data-quality checks over normalized events and lifecycle records.

Every check runs independently and yields one exception bucket. A row may
appear in several buckets. Absent dates never trigger a rule on their own.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import pandas as pd

from clp.models import AnalysisParams, LabelCatalogue
from clp.pipeline.aggregate import AggregateResult, category_dates, earliest, latest, zip_column
from clp.pipeline.normalize import NormalizeResult
from clp.utils.logging import get_logger
from clp.utils.text import is_valid_complaint_id
from clp.utils.time import as_timestamp


logger = get_logger(__name__)

PROBLEM_COMPLAINT_ID = "problem_complaint_id"
INVALID_DATE = "invalid_date"
MULTIPLE_ZIP = "multiple_zip"
MISSING_START_DATE = "missing_start_date"
MISSING_END_DATE = "missing_end_date"
LATE_START_DATE = "late_start_date"
EARLY_END_DATE = "early_end_date"

BUCKET_DESCRIPTIONS: dict[str, str] = {
    PROBLEM_COMPLAINT_ID: (
        "Inspections whose complaint ID is missing or is not a number "
        "(digits, optionally joined to more digits by '.' or '-')."
    ),
    INVALID_DATE: "Inspections dated before the dataset start date or after the export date.",
    MULTIPLE_ZIP: "Complaints linked to more than one distinct property ZIP code.",
    MISSING_START_DATE: "Complaints with no complaint inspection.",
    MISSING_END_DATE: "Complaints with no desk approval and no admin closure.",
    LATE_START_DATE: "Complaints whose complaint inspection is dated after another inspection.",
    EARLY_END_DATE: (
        "Complaints with a desk approval or admin closure dated before a "
        "complaint, reinspection or field inspection."
    ),
}

BUCKET_NAMES: tuple[str, ...] = tuple(BUCKET_DESCRIPTIONS)


@dataclass
class ValidationResult:
    buckets: dict[str, pd.DataFrame] = field(default_factory=dict)

    def counts(self) -> dict[str, int]:
        return {name: len(bucket) for name, bucket in self.buckets.items()}

    def __getitem__(self, name: str) -> pd.DataFrame:
        return self.buckets[name]


def problem_complaint_id_mask(coerced: pd.DataFrame) -> pd.Series:
    return ~coerced["complaint_id"].map(is_valid_complaint_id).astype(bool)


def invalid_date_mask(coerced: pd.DataFrame, params: AnalysisParams) -> pd.Series:
    dates = coerced["event_date"]
    start = as_timestamp(params.dataset_start_date)
    end = as_timestamp(params.dataset_export_date)
    return dates.notna() & ((dates < start) | (dates > end))


def multiple_zip_mask(lifecycles: pd.DataFrame) -> pd.Series:
    column = zip_column(2)
    if column not in lifecycles.columns:
        return pd.Series(False, index=lifecycles.index)
    return lifecycles[column].notna()


def missing_start_date_mask(
    lifecycles: pd.DataFrame, labels: LabelCatalogue, params: AnalysisParams
) -> pd.Series:
    starts = earliest(category_dates(lifecycles, labels, [params.start_category]))
    return starts.isna()


def missing_end_date_mask(
    lifecycles: pd.DataFrame, labels: LabelCatalogue, params: AnalysisParams
) -> pd.Series:
    ends = latest(category_dates(lifecycles, labels, params.terminal_categories))
    return ends.isna()


def late_start_date_mask(
    lifecycles: pd.DataFrame, labels: LabelCatalogue, params: AnalysisParams
) -> pd.Series:
    others = [c for c in params.categories if c != params.start_category]
    starts = earliest(category_dates(lifecycles, labels, [params.start_category]))
    first_other = earliest(category_dates(lifecycles, labels, others))
    return starts.notna() & first_other.notna() & (starts > first_other)


def early_end_date_mask(
    lifecycles: pd.DataFrame, labels: LabelCatalogue, params: AnalysisParams
) -> pd.Series:
    first_end = earliest(category_dates(lifecycles, labels, params.terminal_categories))
    last_open = latest(category_dates(lifecycles, labels, params.non_terminal_categories))
    return first_end.notna() & last_open.notna() & (first_end < last_open)


def _bucket(df: pd.DataFrame, mask: pd.Series) -> pd.DataFrame:
    return df.loc[mask.to_numpy(dtype=bool)].reset_index(drop=True)


def run_validations(
    normalized: NormalizeResult,
    aggregated: AggregateResult,
    params: AnalysisParams,
) -> ValidationResult:
    """Run every check and collect the violating rows per bucket."""
    coerced = normalized.coerced
    lifecycles = aggregated.lifecycles
    labels = aggregated.labels

    buckets = {
        PROBLEM_COMPLAINT_ID: _bucket(coerced, problem_complaint_id_mask(coerced)),
        INVALID_DATE: _bucket(coerced, invalid_date_mask(coerced, params)),
        MULTIPLE_ZIP: _bucket(lifecycles, multiple_zip_mask(lifecycles)),
        MISSING_START_DATE: _bucket(
            lifecycles, missing_start_date_mask(lifecycles, labels, params)
        ),
        MISSING_END_DATE: _bucket(lifecycles, missing_end_date_mask(lifecycles, labels, params)),
        LATE_START_DATE: _bucket(lifecycles, late_start_date_mask(lifecycles, labels, params)),
        EARLY_END_DATE: _bucket(lifecycles, early_end_date_mask(lifecycles, labels, params)),
    }
    result = ValidationResult(buckets=buckets)

    for name, count in result.counts().items():
        if count:
            logger.warning("validate.bucket name=%s count=%s", name, count)
    logger.info("validate.complete buckets=%s", result.counts())
    return result
