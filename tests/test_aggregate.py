import pandas as pd

from clp.pipeline.aggregate import build_lifecycles, category_dates, earliest, latest
from clp.pipeline.normalize import normalize_events


def _lifecycles(params, raw):
    normalized = normalize_events(raw, params)
    return build_lifecycles(normalized.events, normalized.labels)


def test_one_lifecycle_per_complaint_with_sparse_labels(params, make_raw):
    raw = make_raw(
        ("100", "Complaint", "2023-03-01", None),
        ("100", "Desk Approval", "2023-03-10", None),
        ("200", "Complaint", "2023-04-05", None),
    )
    result = _lifecycles(params, raw)
    lifecycles = result.lifecycles.set_index("complaint_id")
    assert sorted(lifecycles.index) == ["100", "200"]
    assert lifecycles.loc["100", "desk approval#01"] == pd.Timestamp("2023-03-10")
    assert pd.isna(lifecycles.loc["200", "desk approval#01"])
    assert lifecycles.loc["200", "complaint#01"] == pd.Timestamp("2023-04-05")


def test_zip_codes_attached_in_first_seen_order(params, make_raw):
    raw = make_raw(
        ("100", "Complaint", "2023-03-01", "98101"),
        ("100", "Field", "2023-03-02", "98103"),
        ("100", "Reinspection", "2023-03-03", "98101"),
        ("100", "Desk Approval", "2023-03-04", "98105"),
        ("200", "Complaint", "2023-03-01", None),
    )
    result = _lifecycles(params, raw)
    lifecycles = result.lifecycles.set_index("complaint_id")
    assert list(lifecycles.loc["100", ["zip_1", "zip_2", "zip_3"]]) == ["98101", "98103", "98105"]
    assert lifecycles.loc["200", ["zip_1", "zip_2", "zip_3"]].isna().all()


def test_zip_slots_exist_without_any_zip_codes(params, make_raw):
    raw = make_raw(("100", "Complaint", "2023-03-01", "n/a"))
    lifecycles = _lifecycles(params, raw).lifecycles
    assert {"zip_1", "zip_2"} <= set(lifecycles.columns)
    assert lifecycles["zip_2"].isna().all()


def test_label_columns_follow_catalogue(params, make_raw):
    raw = make_raw(
        ("100", "Admin Closure", "2023-03-09", None),
        ("100", "Complaint", "2023-03-01", None),
        ("200", "Field", "2023-03-02", None),
    )
    result = _lifecycles(params, raw)
    label_columns = [c for c in result.lifecycles.columns if "#" in c]
    assert label_columns == list(result.labels.labels)
    assert label_columns == ["complaint#01", "field#01", "admin closure#01"]


def test_empty_events_give_empty_lifecycles(params, make_raw):
    raw = make_raw(("100", "Complaint", "2024-01-01", None))
    result = _lifecycles(params, raw)
    assert result.lifecycles.empty
    assert "complaint_id" in result.lifecycles.columns


def test_earliest_and_latest_ignore_absent_dates(params, make_raw):
    raw = make_raw(
        ("100", "Desk Approval", "2023-03-10", None),
        ("100", "Admin Closure", "2023-03-20", None),
        ("200", "Complaint", "2023-03-01", None),
    )
    result = _lifecycles(params, raw)
    lifecycles = result.lifecycles.set_index("complaint_id")
    terminal = category_dates(lifecycles, result.labels, ["desk", "admin"])
    assert latest(terminal)["100"] == pd.Timestamp("2023-03-20")
    assert earliest(terminal)["100"] == pd.Timestamp("2023-03-10")
    assert pd.isna(latest(terminal)["200"])

    none = category_dates(lifecycles, result.labels, ["field"])
    assert earliest(none).isna().all()
