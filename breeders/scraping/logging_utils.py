"""
Structured logging helpers for scraping workflows.
"""

from __future__ import annotations

import json
import logging
from typing import Any

ROOT_LOGGER_NAME = "breeders"
LOG_FORMAT = "%(asctime)s %(levelname)s %(threadName)s %(message)s"


class LogSetupError(RuntimeError):
    """
    Raised when the diagnostics log file cannot be opened.
    """


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """
    Emit one structured log line as compact JSON.
    """

    payload = {"event": event, **fields}
    logger.log(level, json.dumps(payload, default=str, sort_keys=True))


def configure_file_logger(
    path: str,
    *,
    name: str = ROOT_LOGGER_NAME,
    level: int = logging.INFO,
) -> logging.Logger:
    """
    Return a logger that appends only to ``path``.

    Handlers from an earlier call are closed and replaced, and propagation is
    disabled so nothing reaches stdout/stderr.
    """

    try:
        handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    except OSError as exc:
        raise LogSetupError(f"unable to open log file {path}: {exc}") from exc
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger(name)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
