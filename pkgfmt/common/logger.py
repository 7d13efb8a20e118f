"""Logging setup for pkgfmt.

Console output by default, with optional rotating file output and
ISO 8601 timestamps.
"""

import logging
import logging.handlers
import os
from typing import Optional

DEFAULT_LOG_DIR = "/var/log/pkgfmt"
DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def parse_level(level: str) -> int:
    """Convert a level name to its logging constant.

    Raises:
        ValueError: If the name is not a standard level
    """
    level_upper = level.upper()
    if level_upper not in LOG_LEVELS:
        raise ValueError(
            f"Invalid log level: {level}. Must be one of: {', '.join(LOG_LEVELS)}"
        )
    return getattr(logging, level_upper)


def setup_logger(
    name: str,
    level: str = "INFO",
    log_dir: Optional[str] = None,
    file_logging: bool = False,
    console_logging: bool = True,
    log_format: Optional[str] = None,
    max_bytes: int = 1048576,  # 1MB
    backup_count: int = 3,
) -> logging.Logger:
    """Configure a logger with console and optional file handlers.

    Args:
        name: Logger name, usually the package or component name
        level: Logging level name
        log_dir: Directory for the log file (DEFAULT_LOG_DIR if omitted)
        file_logging: Write to ``<log_dir>/<name>.log`` with rotation
        console_logging: Write to stderr
        log_format: Custom log format string
        max_bytes: Maximum log file size before rotation
        backup_count: Number of rotated files to keep

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(parse_level(level))

    # Handlers are only attached once per logger
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        log_format or DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT
    )

    if file_logging:
        directory = log_dir or DEFAULT_LOG_DIR
        os.makedirs(directory, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            os.path.join(directory, f"{name}.log"),
            maxBytes=max_bytes,
            backupCount=backup_count,
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if console_logging:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger below the ``pkgfmt`` namespace."""
    if name != "pkgfmt" and not name.startswith("pkgfmt."):
        name = f"pkgfmt.{name}"
    return logging.getLogger(name)
