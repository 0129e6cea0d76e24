"""Excel report writers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional

import pandas as pd

from clp.models import LABEL_SEPARATOR
from clp.pipeline.metrics import (
    NOTED_MULTIPLE_ZIP,
    NOTED_NO_END_DATE,
    REMOVED_BEFORE_METRICS_START,
    REMOVED_END_PRECEDES_START,
    REMOVED_MISSING_COMPLAINT_DATE,
    MetricsResult,
)
from clp.pipeline.normalize import REMOVED_AFTER_EXPORT, REMOVED_DUPLICATE, REMOVED_MISSING_FIELD
from clp.pipeline.runner import PipelineResult
from clp.pipeline.validate import BUCKET_DESCRIPTIONS
from clp.utils.logging import get_logger


logger = get_logger(__name__)

METRICS_STEM = "complaint-metrics"
EXCEPTIONS_STEM = "complaint-exceptions"
DAYS_SHEET = "Days to resolution"
STATUS_SHEET = "Resolution status"
NOTES_SHEET = "Notes"
ZIP_SLOT = re.compile(r"zip_\d+")

REASON_DESCRIPTIONS: dict[str, str] = {
    REMOVED_MISSING_FIELD: "Inspections dropped for a missing complaint ID, type or date.",
    REMOVED_AFTER_EXPORT: "Inspections dropped for a date after the export date.",
    REMOVED_DUPLICATE: "Repeated inspections of the same complaint, type and date.",
    REMOVED_MISSING_COMPLAINT_DATE: "Complaints left out of metrics: no complaint date.",
    REMOVED_BEFORE_METRICS_START: "Complaints left out of metrics: opened before the metrics start date.",
    REMOVED_END_PRECEDES_START: "Complaints left out of metrics: end date before complaint date.",
    NOTED_NO_END_DATE: "Complaints in metrics that are still unresolved.",
    NOTED_MULTIPLE_ZIP: "Complaints in metrics that have more than one ZIP code.",
}


@dataclass
class ReportPaths:
    metrics: Path
    exceptions: Path


def report_path(output_dir: Path, stem: str, run_date: date) -> Path:
    return output_dir / f"{stem}-{run_date.isoformat()}.xlsx"


def _for_excel(df: pd.DataFrame) -> pd.DataFrame:
    """Render datetime columns as plain dates."""
    out = df.copy()
    for col in out.columns:
        if pd.api.types.is_datetime64_any_dtype(out[col]):
            out[col] = out[col].dt.date
    return out


def compact_bucket(bucket: pd.DataFrame) -> pd.DataFrame:
    """Drop label and ZIP columns that are empty for every row of a bucket."""
    optional = [
        col for col in bucket.columns if LABEL_SEPARATOR in str(col) or ZIP_SLOT.fullmatch(str(col))
    ]
    sparse = [col for col in optional if bucket[col].isna().all()]
    return bucket.drop(columns=sparse)


def notes_frame(result: PipelineResult) -> pd.DataFrame:
    """Describe every exception sheet and every removal counter."""
    rows = []
    for name, count in result.validation.counts().items():
        rows.append(
            {
                "section": "exception",
                "name": name,
                "description": BUCKET_DESCRIPTIONS.get(name, ""),
                "n_records": count,
            }
        )
    reasons = {**result.normalized.removed, **result.metrics.removed}
    for name, count in reasons.items():
        rows.append(
            {
                "section": "removed",
                "name": name,
                "description": REASON_DESCRIPTIONS.get(name, ""),
                "n_records": count,
            }
        )
    for name, count in result.metrics.noted.items():
        rows.append(
            {
                "section": "noted",
                "name": name,
                "description": REASON_DESCRIPTIONS.get(name, ""),
                "n_records": count,
            }
        )
    return pd.DataFrame(rows, columns=["section", "name", "description", "n_records"])


def write_metrics_workbook(metrics: MetricsResult, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        metrics.days_to_resolution.to_excel(writer, sheet_name=DAYS_SHEET, index=False)
        metrics.resolution_status.to_excel(writer, sheet_name=STATUS_SHEET, index=False)
    logger.info("report.metrics path=%s", path)
    return path


def write_exceptions_workbook(result: PipelineResult, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for name, bucket in result.validation.buckets.items():
            _for_excel(compact_bucket(bucket)).to_excel(writer, sheet_name=name, index=False)
        notes_frame(result).to_excel(writer, sheet_name=NOTES_SHEET, index=False)
    logger.info("report.exceptions path=%s", path)
    return path


def write_reports(
    result: PipelineResult,
    output_dir: Path,
    run_date: Optional[date] = None,
) -> ReportPaths:
    """Write the metrics and exceptions workbooks into ``output_dir``."""
    run_date = run_date or date.today()
    return ReportPaths(
        metrics=write_metrics_workbook(
            result.metrics, report_path(output_dir, METRICS_STEM, run_date)
        ),
        exceptions=write_exceptions_workbook(
            result, report_path(output_dir, EXCEPTIONS_STEM, run_date)
        ),
    )
