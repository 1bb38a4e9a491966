"""Logging utilities for socialtext_resting."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    name: str = "socialtext_resting",
    level: str | int = "INFO",
    log_file: Path | None = None,
    console: bool = True,
) -> logging.Logger:
    """Setup standardized logging configuration.

    The client modules log through ``logging.getLogger(__name__)``, so
    configuring the ``socialtext_resting`` logger covers the whole package.

    Args:
        name: Logger name (defaults to the package logger)
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL) or logging constant
        log_file: Optional file path to write logs
        console: Whether to also log to stderr (default: True)

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logging(level="DEBUG")
        >>> logger.debug("Request tracing enabled")
    """
    logger = logging.getLogger(name)
    if isinstance(level, str):
        logger.setLevel(getattr(logging, level.upper()))
    else:
        logger.setLevel(level)

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
