"""
Logging Configuration Module

Configures the "text_chunking" logger tree. Console output goes to stderr
so that chunk JSON printed by the CLI on stdout stays machine-readable.

Environment:
    CHUNKING_LOG_LEVEL: Level name or number used when no level is passed
    CHUNKING_LOG_FILE: Log file used when no file is passed
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "text_chunking"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_level(level: Union[int, str, None]) -> int:
    """
    Turn a level number, a level name ("debug", "INFO") or None into a level.

    None falls back to CHUNKING_LOG_LEVEL, then INFO. Unknown names resolve
    to INFO.
    """
    if level is None:
        level = os.environ.get("CHUNKING_LOG_LEVEL", logging.INFO)
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(
    level: Union[int, str, None] = None,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    Configure logging for the chunking package.

    Args:
        level: Logging level or level name (default: CHUNKING_LOG_LEVEL or INFO)
        log_file: Optional path to log file (default: CHUNKING_LOG_FILE)
        format_string: Optional custom format string

    Returns:
        Configured package logger
    """
    level = resolve_level(level)
    if log_file is None and os.environ.get("CHUNKING_LOG_FILE"):
        log_file = Path(os.environ["CHUNKING_LOG_FILE"])

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Replace handlers from earlier setup calls
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the package namespace (module names are kept as-is)."""
    if name == LOGGER_NAME or name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
