"""
Logging configuration.

Configures loguru logger with log rotation and retention policies.
"""

import sys

from loguru import logger

from refnet.config.settings import settings


def setup_logging(log_file: str | None = None, level: str | None = None) -> None:
    """Configure logger: stderr plus a rotating file sink."""
    level = level or settings.log_level

    logger.remove()
    logger.add(sys.stderr, level=level)
    logger.add(
        log_file or settings.log_file,
        rotation="1 day",
        retention="7 days",
        level=level,
        encoding="utf-8",
    )
