"""Pipeline runner."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from clp.config import Settings
from clp.errors import InputReadError
from clp.ingestion.reader import load_inspections
from clp.models import AnalysisParams
from clp.pipeline.aggregate import AggregateResult, build_lifecycles
from clp.pipeline.metrics import MetricsResult, compute_metrics
from clp.pipeline.normalize import NormalizeResult, normalize_events
from clp.pipeline.validate import ValidationResult, run_validations
from clp.utils.logging import get_logger


logger = get_logger(__name__)


@dataclass
class PipelineResult:
    params: AnalysisParams
    raw_rows: int
    normalized: NormalizeResult
    aggregated: AggregateResult
    validation: ValidationResult
    metrics: MetricsResult

    def counts(self) -> dict[str, int]:
        """Flat overview of row counts, removals and bucket sizes."""
        counts: dict[str, int] = {
            "raw_rows": self.raw_rows,
            "events": len(self.normalized.events),
            "complaints": len(self.aggregated.lifecycles),
            "metric_records": len(self.metrics.records),
            "months_resolved": len(self.metrics.days_to_resolution),
            "months_started": len(self.metrics.resolution_status),
        }
        for reason, count in self.normalized.removed.items():
            counts[f"removed.{reason}"] = count
        for reason, count in self.metrics.removed.items():
            counts[f"removed.{reason}"] = count
        for reason, count in self.metrics.noted.items():
            counts[f"noted.{reason}"] = count
        for name, count in self.validation.counts().items():
            counts[f"bucket.{name}"] = count
        return counts


def run_pipeline(raw: pd.DataFrame, params: AnalysisParams) -> PipelineResult:
    """Run normalize -> aggregate -> validate -> metrics over a raw event table."""
    logger.info(
        "pipeline.start rows=%s dataset_start=%s export_date=%s metrics_start=%s",
        len(raw),
        params.dataset_start_date,
        params.dataset_export_date,
        params.metrics_start_date,
    )
    try:
        normalized = normalize_events(raw, params)
        aggregated = build_lifecycles(normalized.events, normalized.labels)
        validation = run_validations(normalized, aggregated, params)
        metrics = compute_metrics(aggregated.lifecycles, aggregated.labels, params)
    except Exception:
        logger.exception("pipeline.failed rows=%s", len(raw))
        raise

    result = PipelineResult(
        params=params,
        raw_rows=len(raw),
        normalized=normalized,
        aggregated=aggregated,
        validation=validation,
        metrics=metrics,
    )
    logger.info("pipeline.complete %s", " ".join(f"{k}={v}" for k, v in result.counts().items()))
    return result


def run_from_file(
    settings: Optional[Settings] = None,
    input_path: Optional[Union[str, Path]] = None,
    params: Optional[AnalysisParams] = None,
) -> PipelineResult:
    """Load the configured input file and run the pipeline over it."""
    settings = settings or Settings()
    params = params or settings.get_params()
    path = input_path or settings.input_path
    if path is None:
        raise InputReadError("No input file given (set INPUT_PATH or pass --input)")

    raw = load_inspections(path, sheet=settings.input_sheet)
    return run_pipeline(raw, params)
