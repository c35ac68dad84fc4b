"""Logging setup for the atype package."""

from __future__ import annotations

import logging

from .config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach a single stream handler to the ``atype`` logger."""
    logger = logging.getLogger("atype")
    logger.setLevel((level or get_settings().log_level).upper())
    if not any(getattr(h, "_atype_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._atype_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
