"""
Conductor Logging Utilities

Simple logging setup using Python's standard logging library.
Provides sensible defaults while allowing full customization.

Usage:
    from conductor.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Application started")
"""

import logging
import sys
from typing import Optional

DEFAULT_FORMAT = '[%(asctime)s] %(levelname)-8s | %(name)s - %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def get_logger(name: str = "conductor", level: str = "INFO") -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (typically __name__ or module name)
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logging.Logger instance
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, level.upper()))

    return logger


def setup_logging(
    level: str = "INFO",
    format_string: Optional[str] = None,
    date_format: Optional[str] = None
):
    """
    Configure logging globally for the entire application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom log format
        date_format: Custom date format

    Usage:
        setup_logging(level="DEBUG")
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=format_string or DEFAULT_FORMAT,
        datefmt=date_format or DEFAULT_DATE_FORMAT,
        stream=sys.stdout,
        force=True  # Reset any existing configuration
    )


def setup_logging_from_config(config) -> None:
    """Configure logging from a Config class's LOG_LEVEL."""
    setup_logging(level=getattr(config, "LOG_LEVEL", "INFO"))


__all__ = [
    'get_logger',
    'setup_logging',
    'setup_logging_from_config',
]
