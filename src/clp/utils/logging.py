"""Logging setup for the CLI and the pipeline stages."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# openpyxl logs every unsupported style extension it meets in a workbook.
NOISY_LOGGERS = ("openpyxl",)


def configure_logging(
    level: Union[str, int] = "INFO",
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> None:
    """Attach one stream handler to the root logger and route warnings through it."""
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level!r}")
        level = resolved

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        root.addHandler(handler)
    root.setLevel(level)

    logging.captureWarnings(True)
    for name in quiet:
        logging.getLogger(name).setLevel(max(level, logging.ERROR))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name)
