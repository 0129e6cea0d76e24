"""Numeric helpers for report values."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional


def round_half_away(value: Optional[float], digits: int = 1) -> Optional[float]:
    """Round like a spreadsheet does: halves go away from zero."""
    if value is None or math.isnan(value):
        return None
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def percentage(part: int, total: int, digits: int = 1) -> Optional[float]:
    """Share of ``total`` in percent, or ``None`` when there is no data."""
    if total == 0:
        return None
    return round_half_away(100.0 * part / total, digits)
