"""Console logging setup for the mortgage_calc package."""

from __future__ import annotations

import logging
from typing import Optional, Union

from .config import LOG_FORMAT, LOG_LEVEL

ROOT_LOGGER_NAME = "mortgage_calc"


def setup_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """Attach a console handler to the package logger.

    Args:
        level: Logging level; defaults to ``log_level`` from config.yaml

    Returns:
        Configured package logger
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level if level is not None else LOG_LEVEL)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root_logger.addHandler(console_handler)
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger below the package logger, e.g. ``mortgage_calc.model``."""
    if name.startswith(ROOT_LOGGER_NAME + ".") or name == ROOT_LOGGER_NAME:
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
