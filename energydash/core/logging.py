"""Logging setup."""

import logging

from energydash.core.config import settings


def configure_logging() -> None:
    """Configure root logging from settings. Call once at startup."""
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
