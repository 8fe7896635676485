"""Logging setup driven by application settings."""

from __future__ import annotations

import logging

from fieldcast.core.config import AppSettings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: AppSettings) -> None:
    """Apply the configured level to the ``fieldcast`` logger tree."""
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("fieldcast").setLevel(level)
