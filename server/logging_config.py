"""Structured logging configuration for the customer sync."""

from __future__ import annotations

import logging
import os
from typing import Optional

logger = logging.getLogger("customer_sync.server")

_configured = False


def configure_logging(log_level: Optional[str] = None) -> None:
    """Configure logging with structured format; level defaults to LOG_LEVEL."""
    global _configured
    if _configured:
        return

    level_name = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
    numeric_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # The Lambda runtime installs its own root handler, so basicConfig is a no-op there
    logging.getLogger().setLevel(numeric_level)

    # Suppress noisy HTTP client logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    _configured = True
