"""Logging setup for the accounts API (loguru)."""
from __future__ import annotations

import sys

from loguru import logger

from .config import Settings

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def configure_logging(settings: Settings) -> None:
    """Reset loguru and install a single stderr sink at the configured level."""
    logger.remove()
    # diagnose stays off: it would print local variables (passwords) into tracebacks
    logger.add(
        sys.stderr,
        level=settings.log_level,
        format=_FORMAT,
        colorize=settings.app_env != "prod",
        backtrace=settings.app_env != "prod",
        diagnose=False,
    )
