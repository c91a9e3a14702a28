"""Logging utilities for swiftscan commands."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

_LOGGER_NAME = "swiftscan"
_VERBOSE_ENV = "VERBOSE"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the swiftscan hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def verbose_from_env() -> bool:
    """Return True when the pipeline asked for verbose output via ``VERBOSE=true``."""
    return os.environ.get(_VERBOSE_ENV, "false").strip().lower() == "true"


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the swiftscan logger with stderr output and optional file sink."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when CLI is invoked multiple times.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    # Log records go to stderr; stdout is reserved for command results.
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("[swiftscan] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger", "verbose_from_env"]
