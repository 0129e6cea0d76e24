"""Event normalization: typing, filtering, deduplication and sequencing."""

from __future__ import annotations

from dataclasses import dataclass, field

import pandas as pd

from clp.errors import MissingColumnsError
from clp.models import EVENT_COLUMNS, AnalysisParams, LabelCatalogue, make_label
from clp.utils.hashing import event_key
from clp.utils.logging import get_logger
from clp.utils.text import as_text, extract_zip, normalize_event_type
from clp.utils.time import as_timestamp, to_calendar_dates


logger = get_logger(__name__)

REQUIRED_FIELDS: tuple[str, ...] = ("complaint_id", "event_type", "event_date")

REMOVED_MISSING_FIELD = "missing_required_field"
REMOVED_AFTER_EXPORT = "after_export_date"
REMOVED_DUPLICATE = "duplicate_event"


@dataclass
class NormalizeResult:
    events: pd.DataFrame
    coerced: pd.DataFrame
    labels: LabelCatalogue
    removed: dict[str, int] = field(default_factory=dict)

    @property
    def removed_total(self) -> int:
        return sum(self.removed.values())


def coerce_events(raw: pd.DataFrame) -> pd.DataFrame:
    """Type every raw row without dropping any of them."""
    missing = [col for col in EVENT_COLUMNS if col not in raw.columns]
    if missing:
        raise MissingColumnsError(missing, source="events")

    df = raw.loc[:, list(EVENT_COLUMNS)].copy()
    df["event_id"] = df["event_id"].map(as_text).astype(object)
    df["complaint_id"] = df["complaint_id"].map(as_text).astype(object)
    df["event_type"] = df["event_type"].map(as_text).map(normalize_event_type).astype(object)
    df["event_date"] = to_calendar_dates(df["event_date"])
    df["zip_code"] = df["zip_code"].map(as_text).map(extract_zip).astype(object)
    return df.reset_index(drop=True)


def build_catalogue(events: pd.DataFrame, params: AnalysisParams) -> LabelCatalogue:
    """Order labels by category, then event type, then ordinal."""
    if events.empty:
        return LabelCatalogue()

    rank = {category: i for i, category in enumerate(params.categories)}
    unique = events.drop_duplicates(subset="label")[["label", "event_type", "ordinal", "category"]]
    rows = sorted(
        unique.itertuples(index=False),
        key=lambda row: (rank.get(row.category, len(rank)), row.event_type, row.ordinal),
    )
    return LabelCatalogue(
        labels=tuple(row.label for row in rows),
        categories={row.label: row.category for row in rows},
        max_ordinal=int(events["ordinal"].max()),
    )


def normalize_events(raw: pd.DataFrame, params: AnalysisParams) -> NormalizeResult:
    """Clean raw inspection rows into sequenced, labelled events."""
    coerced = coerce_events(raw)
    removed: dict[str, int] = {}

    missing_mask = coerced[list(REQUIRED_FIELDS)].isna().any(axis=1)
    removed[REMOVED_MISSING_FIELD] = int(missing_mask.sum())
    df = coerced.loc[~missing_mask]

    export_date = as_timestamp(params.dataset_export_date)
    future_mask = df["event_date"] > export_date
    removed[REMOVED_AFTER_EXPORT] = int(future_mask.sum())
    df = df.loc[~future_mask]

    df = df.sort_values("event_date", kind="mergesort").copy()
    df["event_key"] = [
        event_key(complaint_id, event_type, event_date.date())
        for complaint_id, event_type, event_date in zip(
            df["complaint_id"], df["event_type"], df["event_date"]
        )
    ]
    duplicate_mask = df.duplicated(subset="event_key", keep="first")
    removed[REMOVED_DUPLICATE] = int(duplicate_mask.sum())
    df = df.loc[~duplicate_mask].copy()

    df["ordinal"] = df.groupby(["complaint_id", "event_type"], sort=False).cumcount() + 1
    df["label"] = [make_label(t, o) for t, o in zip(df["event_type"], df["ordinal"])]
    df["category"] = df["event_type"].map(params.category_of).astype(object)

    events = df[
        [
            "event_id",
            "event_key",
            "complaint_id",
            "event_type",
            "category",
            "ordinal",
            "label",
            "event_date",
            "zip_code",
        ]
    ].reset_index(drop=True)

    unrecognized = int(events["category"].isna().sum())
    if unrecognized:
        logger.warning("normalize.unrecognized_event_types count=%s", unrecognized)

    labels = build_catalogue(events, params)
    logger.info(
        "normalize.complete raw=%s events=%s labels=%s max_ordinal=%s removed=%s",
        len(coerced),
        len(events),
        len(labels),
        labels.max_ordinal,
        removed,
    )
    return NormalizeResult(events=events, coerced=coerced, labels=labels, removed=removed)
