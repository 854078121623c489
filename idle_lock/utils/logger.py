"""Logging configuration for Idle Lock."""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

LOGGER_NAME = "idle_lock"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    stream: Optional[TextIO] = None,
    file_level: Optional[str] = None,
) -> logging.Logger:
    """Set up the package logger.

    Console output goes to ``stream`` (stdout by default). Commands that print
    their own report on stdout pass stderr instead. The optional log file gets
    its own threshold through ``file_level`` and defaults to ``log_level``.
    """
    console_level = _level_from_name(log_level)
    file_threshold = _level_from_name(file_level) if file_level else console_level

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(min(console_level, file_threshold) if log_file else console_level)
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(file_threshold)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger() -> logging.Logger:
    """Get the Idle Lock logger."""
    return logging.getLogger(LOGGER_NAME)
