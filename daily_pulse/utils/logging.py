"""Logging setup for the CLI.

Command output goes to stdout, so log records are written to stderr and,
when ``LOG_FILE_PATH`` is set, to a rotating file as well.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

_TEXT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_JSON_FORMAT = '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", "message": "%(message)s"}'


def configure_logging(level: str | None = None) -> None:
    """Reset root handlers from ``level`` and the LOG_* environment.

    LOG_LEVEL (default WARNING) applies when ``level`` is None; LOG_FORMAT is
    "text" or "json"; LOG_FILE_PATH adds a file handler.
    """
    level = (level or os.environ.get("LOG_LEVEL") or "WARNING").upper()
    use_json = os.environ.get("LOG_FORMAT", "text").lower() == "json"
    formatter = logging.Formatter(_JSON_FORMAT if use_json else _TEXT_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    file_path = os.environ.get("LOG_FILE_PATH")
    if file_path:
        log_dir = os.path.dirname(file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(file_path, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
