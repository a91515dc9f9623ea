"""
Logging utilities for the HotPay AnyChain backend.

Provides standardized logger configuration.

Logging rules:
- Log record ids, statuses and counts; never invoice metadata payloads
- Never log SUPABASE_KEY or other secrets
- Storage failures are logged with exc_info at the route boundary
"""

import logging
from typing import Optional

from hotpay.config import settings


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a configured logger for the specified module.

    Args:
        name: Module name (typically __name__)
        level: Optional logging level (defaults to settings.LOG_LEVEL)

    Returns:
        Configured logger instance

    Usage:
        >>> from hotpay.utils.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Invoice marked paid")
    """
    logger = logging.getLogger(name)

    if level is None:
        level = logging.getLevelName(settings.LOG_LEVEL.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger.setLevel(level)

    # Add handler if not already configured (avoid duplicate handlers)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
