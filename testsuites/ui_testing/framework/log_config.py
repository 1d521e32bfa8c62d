"""
================================================================================
Logging Setup
================================================================================

Centralized Loguru configuration for the E2E suite.

Per-test context is explicit: callers bind the test id onto the logger
(`logger.bind(test=nodeid)`) instead of relying on a thread-scoped
"current test". The report listener routes records carrying that binding
into the matching test's report section.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .config import ConfigLoader


DEFAULT_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
)

_logger_initialized: bool = False


def init_logger(
    level: Optional[str] = None,
    format_str: Optional[str] = None,
    config: Optional[ConfigLoader] = None,
) -> None:
    """
    Initialize the global Loguru logger once per process.

    Args:
        level: Log level. Defaults to LOG_LEVEL env, then `logging.level`.
        format_str: Custom format. Defaults to `logging.format`.
        config: Loaded configuration file (read fresh if omitted)
    """
    global _logger_initialized

    if _logger_initialized:
        return

    config = config or ConfigLoader()

    log_level = (level or os.environ.get("LOG_LEVEL") or config.get("logging.level", "INFO")).upper()
    log_format = format_str or config.get("logging.format", DEFAULT_FORMAT)

    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        format=log_format,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    log_file = config.get("logging.file")
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=log_level,
            format=log_format.replace("{level: <8}", "{level}"),
            rotation=config.get("logging.rotation", "10 MB"),
            retention=config.get("logging.retention", "7 days"),
            compression="zip",
            enqueue=True,
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {log_level}")


def bound_logger(nodeid: str):
    """Logger carrying an explicit test context."""
    return logger.bind(test=nodeid)


__all__ = [
    "init_logger",
    "bound_logger",
]
