"""Errors that stop a pipeline run."""

from __future__ import annotations

from typing import Sequence


class PipelineError(Exception):
    """Base error for this package."""


class InputReadError(PipelineError):
    """Raised when the input file is missing or cannot be parsed."""


class MissingColumnsError(PipelineError):
    """Raised when the input lacks columns the pipeline needs."""

    def __init__(self, missing: Sequence[str], source: str = "input") -> None:
        self.missing = list(missing)
        self.source = source
        super().__init__(f"{source}: missing required column(s): {self.missing}")
