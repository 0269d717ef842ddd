"""
Logging for the service: one console handler on the root logger, plus a
file handler when LOG_FILE is set.

Configuration is skipped when the root logger already has handlers (an
embedding server or pytest set it up first), so ``create_app`` can be
called any number of times.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import Any

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def build_logging_config(level: str, logfile: str | None = None) -> dict[str, Any]:
    """dictConfig schema for ``level`` (unknown names mean INFO)."""
    level = level.upper()
    if not isinstance(logging.getLevelName(level), int):
        level = "INFO"

    handlers: dict[str, dict[str, Any]] = {
        "console": {"class": "logging.StreamHandler", "formatter": "plain"},
    }
    if logfile:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "plain",
            "filename": str(Path(logfile).resolve()),
            "encoding": "utf-8",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"plain": {"format": LOG_FORMAT, "datefmt": DATE_FORMAT}},
        "handlers": handlers,
        "root": {"level": level, "handlers": list(handlers)},
    }


def setup_logging(level: str = "INFO", logfile: str | None = None) -> None:
    if logging.getLogger().handlers:
        return
    logging.config.dictConfig(build_logging_config(level, logfile))
