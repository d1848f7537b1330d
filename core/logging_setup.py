"""Logging configuration for the ``taskorder`` logger namespace."""

from __future__ import annotations

import logging
from typing import Any

ROOT_LOGGER = "taskorder"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(config: dict[str, Any]) -> logging.Logger:
    """Apply ``logging.level`` from config to the ``taskorder`` logger tree."""
    level_name = str(config.get("logging", {}).get("level", "INFO")).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown logging level: {level_name}")

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    logger.propagate = False
    return logger
