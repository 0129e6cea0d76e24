"""Pipeline stages."""

from clp.pipeline.aggregate import build_lifecycles
from clp.pipeline.metrics import compute_metrics
from clp.pipeline.normalize import normalize_events
from clp.pipeline.runner import PipelineResult, run_from_file, run_pipeline
from clp.pipeline.validate import run_validations

__all__ = [
    "normalize_events",
    "build_lifecycles",
    "run_validations",
    "compute_metrics",
    "PipelineResult",
    "run_pipeline",
    "run_from_file",
]
