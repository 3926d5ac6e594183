"""Logging setup for the ``necrosis`` package namespace."""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Union


def setup_logging(
    level: Union[int, str] = logging.INFO, log_file: Optional[Union[str, Path]] = None
) -> logging.Logger:
    """Configure the ``necrosis`` logger.

    Args:
        level: Logging level, as a number or a name such as ``"DEBUG"``.
        log_file: Optional path that receives a copy of the log.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger = logging.getLogger("necrosis")
    logger.setLevel(level)

    # Avoid duplicate output when called more than once.
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    # Diagnostics go to stderr so stdout stays clean for layout output.
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
