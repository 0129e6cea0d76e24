from datetime import date

import pandas as pd
import pytest

from clp.models import AnalysisParams


@pytest.fixture
def params() -> AnalysisParams:
    return AnalysisParams(
        dataset_start_date=date(2020, 1, 1),
        dataset_export_date=date(2023, 6, 30),
        metrics_start_date=date(2022, 1, 1),
    )


def build_raw(*rows) -> pd.DataFrame:
    """Raw event table from (complaint_id, inspection_type, date, zip) tuples."""
    return pd.DataFrame(
        [
            {
                "event_id": str(i),
                "complaint_id": cid,
                "event_type": kind,
                "event_date": when,
                "zip_code": zip_code,
            }
            for i, (cid, kind, when, zip_code) in enumerate(rows, start=1)
        ],
        columns=["event_id", "complaint_id", "event_type", "event_date", "zip_code"],
    )


@pytest.fixture
def make_raw():
    return build_raw
