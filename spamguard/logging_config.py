"""Logging configuration for SpamGuard Chat."""

import logging
import sys
from typing import Optional

# Configure root logger
logger = logging.getLogger("spamguard")


def configure_logging(level: Optional[str] = None) -> None:
    """Set up logging configuration."""

    if level is None:
        from .config import get_settings

        level = get_settings().log_level
    level = level.upper()

    # Configure root logger first
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear all existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    formatter = logging.Formatter(
        '[%(asctime)s][%(levelname)s] %(message)s'
    )
    console_handler.setFormatter(formatter)

    root_logger.addHandler(console_handler)

    # Package loggers propagate to the root handler
    logger.handlers.clear()
    logger.setLevel(level)
    logger.propagate = True

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str = "spamguard") -> logging.Logger:
    """Get logger instance."""
    return logging.getLogger(name)
