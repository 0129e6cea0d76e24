"""Core data models shared by the pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, model_validator


DEFAULT_CATEGORIES: tuple[str, ...] = ("complaint", "reinspection", "field", "desk", "admin")
DEFAULT_TERMINAL_CATEGORIES: tuple[str, ...] = ("desk", "admin")

# Column names used between stages.
EVENT_COLUMNS: tuple[str, ...] = ("event_id", "complaint_id", "event_type", "event_date", "zip_code")
LABEL_SEPARATOR = "#"


class AnalysisParams(BaseModel):
    """Dataset window and category configuration consumed by the pipeline."""

    model_config = ConfigDict(frozen=True)

    dataset_start_date: date
    dataset_export_date: date
    metrics_start_date: date
    categories: tuple[str, ...] = DEFAULT_CATEGORIES
    terminal_categories: tuple[str, ...] = DEFAULT_TERMINAL_CATEGORIES
    start_category: str = "complaint"

    @model_validator(mode="after")
    def _check_consistency(self) -> "AnalysisParams":
        if self.dataset_start_date > self.dataset_export_date:
            raise ValueError("dataset_start_date must not be after dataset_export_date")
        if not self.categories:
            raise ValueError("categories must not be empty")
        unknown = [c for c in self.terminal_categories if c not in self.categories]
        if unknown:
            raise ValueError(f"terminal categories not in category list: {unknown}")
        if self.start_category not in self.categories:
            raise ValueError(f"start category {self.start_category!r} not in category list")
        if self.start_category in self.terminal_categories:
            raise ValueError("start category cannot be a terminal category")
        return self

    @property
    def non_terminal_categories(self) -> tuple[str, ...]:
        return tuple(c for c in self.categories if c not in self.terminal_categories)

    def category_of(self, event_type: Optional[str]) -> Optional[str]:
        """Return the first configured category the event type starts with."""
        if not event_type:
            return None
        for category in self.categories:
            if event_type.startswith(category):
                return category
        return None


def make_label(event_type: str, ordinal: int) -> str:
    """Composite label such as ``complaint#01``."""
    return f"{event_type}{LABEL_SEPARATOR}{ordinal:02d}"


@dataclass(frozen=True)
class LabelCatalogue:
    """Ordered composite labels observed at normalization, with their categories."""

    labels: tuple[str, ...] = ()
    categories: dict[str, Optional[str]] = field(default_factory=dict)
    max_ordinal: int = 0

    def for_categories(self, categories: Iterable[str]) -> list[str]:
        wanted = set(categories)
        return [label for label in self.labels if self.categories.get(label) in wanted]

    def __len__(self) -> int:
        return len(self.labels)
