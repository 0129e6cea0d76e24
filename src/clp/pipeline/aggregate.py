"""Per-complaint lifecycle records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import pandas as pd

from clp.models import LabelCatalogue
from clp.utils.logging import get_logger


logger = get_logger(__name__)

MIN_ZIP_SLOTS = 2


@dataclass
class AggregateResult:
    lifecycles: pd.DataFrame
    labels: LabelCatalogue


def zip_column(slot: int) -> str:
    return f"zip_{slot}"


def collect_zip_codes(events: pd.DataFrame) -> pd.DataFrame:
    """Distinct ZIP codes per complaint, in first-seen order, as ``zip_1..zip_n``."""
    pairs = events.loc[events["zip_code"].notna(), ["complaint_id", "zip_code"]]
    pairs = pairs.drop_duplicates().copy()
    if pairs.empty:
        columns = [zip_column(slot) for slot in range(1, MIN_ZIP_SLOTS + 1)]
        return pd.DataFrame(columns=columns, index=pd.Index([], name="complaint_id"), dtype=object)

    pairs["slot"] = pairs.groupby("complaint_id", sort=False).cumcount() + 1

    slots = max(MIN_ZIP_SLOTS, int(pairs["slot"].max()))
    wide = pairs.pivot(index="complaint_id", columns="slot", values="zip_code")
    wide = wide.reindex(columns=range(1, slots + 1))
    wide.columns = [zip_column(slot) for slot in wide.columns]
    wide.index.name = "complaint_id"
    return wide


def build_lifecycles(events: pd.DataFrame, labels: LabelCatalogue) -> AggregateResult:
    """Pivot normalized events into one row per complaint keyed by composite label."""
    if events.empty:
        dates = pd.DataFrame(
            columns=list(labels.labels), index=pd.Index([], name="complaint_id"), dtype="datetime64[ns]"
        )
    else:
        dates = events.pivot(index="complaint_id", columns="label", values="event_date")
        dates = dates.reindex(columns=list(labels.labels))
    dates.columns.name = None
    dates.index.name = "complaint_id"

    lifecycles = dates.join(collect_zip_codes(events), how="left").reset_index()

    logger.info(
        "aggregate.complete complaints=%s labels=%s multi_zip=%s",
        len(lifecycles),
        len(labels),
        int(lifecycles[zip_column(2)].notna().sum()),
    )
    return AggregateResult(lifecycles=lifecycles, labels=labels)


def category_dates(
    lifecycles: pd.DataFrame, labels: LabelCatalogue, categories: Iterable[str]
) -> pd.DataFrame:
    """Date columns of every label belonging to ``categories``."""
    return lifecycles.reindex(columns=labels.for_categories(categories))


def earliest(dates: pd.DataFrame) -> pd.Series:
    """Row-wise minimum date, ignoring absent values."""
    if dates.empty:
        return pd.Series(pd.NaT, index=dates.index, dtype="datetime64[ns]")
    return dates.min(axis=1)


def latest(dates: pd.DataFrame) -> pd.Series:
    """Row-wise maximum date, ignoring absent values."""
    if dates.empty:
        return pd.Series(pd.NaT, index=dates.index, dtype="datetime64[ns]")
    return dates.max(axis=1)
