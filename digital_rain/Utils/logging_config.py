"""
Logging configuration for digital_rain.

The TUI owns the terminal while the rain is running, so log records go to a
file sink by default; a stderr sink is only added on request (for headless
runs or when the app fails before the screen is taken over).
"""

import os
import sys
from typing import Optional

from loguru import logger


DEFAULT_LOG_LEVEL = os.environ.get("DIGITAL_RAIN_LOG_LEVEL", "INFO")
DEFAULT_LOG_FILE = os.environ.get("DIGITAL_RAIN_LOG_FILE")

LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{name}:{function}:{line} - {message}"
)


def is_valid_log_level(level: str) -> bool:
    """True if loguru knows a level by this name."""
    try:
        logger.level(level)
    except ValueError:
        return False
    return True


def configure_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    console: bool = False,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Configure loguru sinks for the application.

    This should be called once at startup.

    Args:
        level: Minimum level for all sinks (defaults to DIGITAL_RAIN_LOG_LEVEL or INFO).
        log_file: File sink path (defaults to DIGITAL_RAIN_LOG_FILE); no file sink if unset.
        console: Also log to stderr.
        rotation: Size or time at which the log file is rotated.
        retention: How long rotated files are kept.
    """
    requested_level = (level or DEFAULT_LOG_LEVEL).upper()
    level = requested_level if is_valid_log_level(requested_level) else "INFO"
    log_file = log_file or DEFAULT_LOG_FILE

    logger.remove()  # Remove default handler

    if log_file:
        logger.add(
            sink=log_file,
            level=level,
            format=LOG_FORMAT,
            rotation=rotation,
            retention=retention,
        )

    if console:
        logger.add(
            sink=sys.stderr,
            level=level,
            colorize=True
        )

    if level != requested_level:
        logger.warning(f"Unknown log level '{requested_level}', using {level}")
    logger.debug(f"digital_rain logging configured: level={level}, file={log_file}, console={console}")
