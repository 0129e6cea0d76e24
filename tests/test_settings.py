from datetime import date

import pytest
from pydantic import ValidationError

from clp.config import Settings
from clp.models import AnalysisParams


def test_settings_build_params():
    settings = Settings(
        _env_file=None,
        dataset_start_date=date(2020, 1, 1),
        dataset_export_date=date(2023, 6, 30),
        metrics_start_date=date(2022, 1, 1),
    )
    params = settings.get_params()
    assert params.categories == ("complaint", "reinspection", "field", "desk", "admin")
    assert params.terminal_categories == ("desk", "admin")
    assert params.non_terminal_categories == ("complaint", "reinspection", "field")


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("DATASET_START_DATE", "2020-01-01")
    monkeypatch.setenv("DATASET_EXPORT_DATE", "2023-06-30")
    monkeypatch.setenv("METRICS_START_DATE", "2022-01-01")
    monkeypatch.setenv("EVENT_CATEGORIES", '["complaint", "field", "desk"]')
    monkeypatch.setenv("TERMINAL_CATEGORIES", '["desk"]')
    params = Settings(_env_file=None).get_params()
    assert params.dataset_export_date == date(2023, 6, 30)
    assert params.categories == ("complaint", "field", "desk")


def test_settings_require_dates(monkeypatch):
    monkeypatch.delenv("METRICS_START_DATE", raising=False)
    settings = Settings(
        _env_file=None,
        dataset_start_date=date(2020, 1, 1),
        dataset_export_date=date(2023, 6, 30),
    )
    with pytest.raises(ValueError, match="METRICS_START_DATE"):
        settings.get_params()


def test_params_reject_inverted_window():
    with pytest.raises(ValidationError):
        AnalysisParams(
            dataset_start_date=date(2024, 1, 1),
            dataset_export_date=date(2023, 6, 30),
            metrics_start_date=date(2022, 1, 1),
        )


def test_params_reject_unknown_terminal_category():
    with pytest.raises(ValidationError):
        AnalysisParams(
            dataset_start_date=date(2020, 1, 1),
            dataset_export_date=date(2023, 6, 30),
            metrics_start_date=date(2022, 1, 1),
            terminal_categories=("closed",),
        )


def test_category_of_uses_first_matching_prefix(params):
    assert params.category_of("desk approval") == "desk"
    assert params.category_of("complaint - tenant") == "complaint"
    assert params.category_of("phone call") is None
    assert params.category_of(None) is None


def test_settings_accept_comma_separated_categories(monkeypatch):
    monkeypatch.setenv("DATASET_START_DATE", "2020-01-01")
    monkeypatch.setenv("DATASET_EXPORT_DATE", "2023-06-30")
    monkeypatch.setenv("METRICS_START_DATE", "2022-01-01")
    monkeypatch.setenv("EVENT_CATEGORIES", "complaint, field,desk")
    monkeypatch.setenv("TERMINAL_CATEGORIES", "desk")
    params = Settings(_env_file=None).get_params()
    assert params.categories == ("complaint", "field", "desk")
    assert params.terminal_categories == ("desk",)
