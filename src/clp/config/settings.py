"""Application settings loaded from environment."""

import json
from datetime import date
from pathlib import Path
from typing import Annotated, Any, Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from clp.models import DEFAULT_CATEGORIES, DEFAULT_TERMINAL_CATEGORIES, AnalysisParams


class Settings(BaseSettings):
    """Strongly typed settings for the pipeline."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Input / output
    input_path: Optional[Path] = Field(default=None, alias="INPUT_PATH")
    input_sheet: Union[int, str] = Field(default=0, alias="INPUT_SHEET")
    output_dir: Path = Field(default=Path("output"), alias="OUTPUT_DIR")

    # Dataset window
    dataset_start_date: Optional[date] = Field(default=None, alias="DATASET_START_DATE")
    dataset_export_date: Optional[date] = Field(default=None, alias="DATASET_EXPORT_DATE")
    metrics_start_date: Optional[date] = Field(default=None, alias="METRICS_START_DATE")

    # Event categories: comma-separated ("complaint,field,desk") or a JSON array
    event_categories: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_CATEGORIES), alias="EVENT_CATEGORIES"
    )
    terminal_categories: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_TERMINAL_CATEGORIES),
        alias="TERMINAL_CATEGORIES",
    )
    start_category: str = Field(default="complaint", alias="START_CATEGORY")

    @field_validator("event_categories", "terminal_categories", mode="before")
    @classmethod
    def _split_categories(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        text = value.strip()
        if text.startswith("["):
            return json.loads(text)
        return [item.strip() for item in text.split(",") if item.strip()]

    # Runtime
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    def get_params(self) -> AnalysisParams:
        """Return validated analysis parameters or raise."""
        missing = [
            alias
            for alias, value in (
                ("DATASET_START_DATE", self.dataset_start_date),
                ("DATASET_EXPORT_DATE", self.dataset_export_date),
                ("METRICS_START_DATE", self.metrics_start_date),
            )
            if value is None
        ]
        if missing:
            raise ValueError(f"Missing required date setting(s): {', '.join(missing)}")

        return AnalysisParams(
            dataset_start_date=self.dataset_start_date,
            dataset_export_date=self.dataset_export_date,
            metrics_start_date=self.metrics_start_date,
            categories=tuple(self.event_categories),
            terminal_categories=tuple(self.terminal_categories),
            start_category=self.start_category,
        )
