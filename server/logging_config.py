"""Logging configuration for the clinic dispatch service."""

from __future__ import annotations

import logging
import os

logger = logging.getLogger("clinic.server")


def configure_logging() -> None:
    """Configure logging with a single format and a configurable log level."""
    if logger.handlers:
        return

    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    numeric_level = getattr(logging, log_level, logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Suppress noisy HTTP client logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    # Temporal's worker logs every poll at INFO
    logging.getLogger("temporalio").setLevel(logging.WARNING)
