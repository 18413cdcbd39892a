"""Logging configuration for DNSwitch.

This module provides centralized logging configuration using Loguru.
It sets up logging to both file and console with proper formatting
and log rotation. The console sink stays quiet below WARNING so it does
not interleave with the interactive menu.
"""

import sys

from loguru import logger

from dnswitch.core.utils.utils import LOG_DIR

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"
LOG_FILE = LOG_DIR / "dnswitch.log"


def setup_logging(*, debug: bool = False) -> None:
    """Configure console and file sinks.

    Args:
        debug: Log everything down to DEBUG on the console as well
    """
    logger.remove()  # Remove default handler

    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level="DEBUG" if debug else "WARNING",
        backtrace=True,
        diagnose=debug,
    )

    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning(f"Log directory {LOG_DIR} unavailable, file logging disabled: {e}")
        return

    logger.add(
        LOG_FILE,
        rotation="10 MB",
        retention="1 week",
        compression="zip",
        format=FILE_FORMAT,
        level="DEBUG",
        backtrace=True,
        diagnose=False,
    )


__all__ = ["LOG_DIR", "LOG_FILE", "logger", "setup_logging"]
