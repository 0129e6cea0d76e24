"""Utility helpers."""

from clp.utils.hashing import event_key
from clp.utils.logging import configure_logging, get_logger
from clp.utils.numbers import percentage, round_half_away
from clp.utils.text import clean_column_name, extract_zip, is_valid_complaint_id

__all__ = [
    "event_key",
    "configure_logging",
    "get_logger",
    "percentage",
    "round_half_away",
    "clean_column_name",
    "extract_zip",
    "is_valid_complaint_id",
]
