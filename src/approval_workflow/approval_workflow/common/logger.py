"""Logging setup for the approval workflow.

Console output always, plus an optional rotating log file, with ISO 8601
timestamps. Modules obtain their loggers with logging.getLogger(__name__);
this only configures the package root logger once at startup.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from typing import Optional

# Package root logger, whatever path the package was imported under
PACKAGE_LOGGER = __name__.rsplit(".", 2)[0]

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def setup_logger(
    name: str = PACKAGE_LOGGER,
    *,
    level: str = "INFO",
    log_dir: Optional[str] = None,
    max_bytes: int = 10485760,  # 10MB
    backup_count: int = 5,
) -> logging.Logger:
    """Configure and return the logger called `name`.

    Args:
        name: Logger name, the package root by default
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_dir: Directory for a rotating `<name>.log`; no file logging if None
        max_bytes: Maximum log file size before rotation
        backup_count: Number of rotated files to keep

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    level_upper = (level or "INFO").upper()
    if not isinstance(logging.getLevelName(level_upper), int):
        raise ValueError(
            f"Invalid log level: {level}. "
            f"Must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL"
        )
    logger.setLevel(level_upper)

    # Prevent duplicate handlers when create_app() runs more than once
    if logger.handlers:
        return logger

    formatter = logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            os.path.join(log_dir, f"{name}.log"), maxBytes=max_bytes, backupCount=backup_count
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
