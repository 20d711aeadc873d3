"""
Logging for heapsearch components.

Every module asks for a logger through get_search_logger() so console and
optional file output share one format.
"""

import logging
import os
from typing import Optional

LOG_LEVEL = os.getenv("HEAPSEARCH_LOG_LEVEL", "WARNING")
LOG_FILE = os.getenv("HEAPSEARCH_LOG_FILE") or None


def _resolve_level(level) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def get_search_logger(
    name: str, log_file: Optional[str] = LOG_FILE, level=None
) -> logging.Logger:
    """
    Get a configured logger for a heapsearch component.

    Args:
        name: Component name (typically __name__ of the calling module)
        log_file: Optional file to copy log records to. Defaults to HEAPSEARCH_LOG_FILE.
        level: Logging level; name or number. Defaults to HEAPSEARCH_LOG_LEVEL.

    Returns:
        Configured logger instance
    """
    if not name.startswith("heapsearch"):
        name = f"heapsearch.{name}"
    logger = logging.getLogger(name)

    # Reconfiguring must not stack handlers
    logger.handlers.clear()

    formatter = logging.Formatter(
        "[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.setLevel(_resolve_level(LOG_LEVEL if level is None else level))
    return logger
