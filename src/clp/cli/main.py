"""Typer CLI entry point."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional

import typer

from clp.config import Settings
from clp.errors import PipelineError
from clp.ingestion.reader import load_inspections
from clp.pipeline.runner import run_from_file
from clp.reporting.workbook import write_reports
from clp.utils.logging import configure_logging, get_logger


app = typer.Typer(help="Complaint Lifecycle Pipeline CLI")

logger = get_logger(__name__)


def _parse_date(value: Optional[str], option: str) -> Optional[date]:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"expected YYYY-MM-DD, got {value!r}", param_hint=option)


@app.callback()
def main() -> None:
    """Initialize logging for all commands."""
    try:
        configure_logging(Settings().log_level)
    except ValueError as exc:
        typer.echo(f"Invalid settings: {exc}", err=True)
        raise typer.Exit(1)


@app.command("run")
def run(
    input_path: Optional[Path] = typer.Option(
        None, "--input", help="Inspection history file (.xlsx or .csv); defaults to INPUT_PATH"
    ),
    output_dir: Optional[Path] = typer.Option(
        None, help="Directory for the report workbooks; defaults to OUTPUT_DIR"
    ),
    dataset_start_date: Optional[str] = typer.Option(
        None, help="First valid inspection date (YYYY-MM-DD)"
    ),
    export_date: Optional[str] = typer.Option(None, help="Dataset export date (YYYY-MM-DD)"),
    metrics_start_date: Optional[str] = typer.Option(
        None, help="Only complaints opened on/after this date enter metrics (YYYY-MM-DD)"
    ),
    dry_run: bool = typer.Option(False, help="Do not write report workbooks"),
) -> None:
    """Run the pipeline and write the metrics and exceptions workbooks."""
    overrides = {
        "dataset_start_date": _parse_date(dataset_start_date, "--dataset-start-date"),
        "dataset_export_date": _parse_date(export_date, "--export-date"),
        "metrics_start_date": _parse_date(metrics_start_date, "--metrics-start-date"),
        "input_path": input_path,
        "output_dir": output_dir,
    }
    try:
        settings = Settings(**{k: v for k, v in overrides.items() if v is not None})
        result = run_from_file(settings)
        if dry_run:
            for key, value in result.counts().items():
                logger.info("dry_run.count %s=%s", key, value)
            return
        paths = write_reports(result, settings.output_dir)
    except (PipelineError, ValueError, OSError) as exc:
        logger.error("run.failed: %s", exc)
        typer.echo(f"Pipeline failed: {exc}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Metrics: {paths.metrics}")
    typer.echo(f"Exceptions: {paths.exceptions}")


@app.command("check")
def check(
    input_path: Path = typer.Option(..., "--input", help="Inspection history file to check"),
) -> None:
    """Check that the input file is readable and has the required columns."""
    settings = Settings()
    try:
        raw = load_inspections(input_path, sheet=settings.input_sheet)
    except PipelineError as exc:
        logger.error("check.failed: %s", exc)
        typer.echo(f"Input check failed: {exc}", err=True)
        raise typer.Exit(1)

    logger.info("check.ok rows=%s", len(raw))
    typer.echo(f"OK: {len(raw)} rows")


if __name__ == "__main__":
    app()
