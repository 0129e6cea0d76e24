"""Ingestion package."""

from clp.ingestion.reader import load_inspections, select_required_columns

__all__ = ["load_inspections", "select_required_columns"]
