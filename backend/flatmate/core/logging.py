"""Namespaced logging for the Flatmate Finder backend."""

from __future__ import annotations

import logging
from typing import Optional

from flatmate.core.config import get_settings

NAMESPACE = "flatmate"


def configure_logging(namespace: str = NAMESPACE) -> logging.Logger:
    """Return the root project logger, installing a stream handler once.

    Records are single lines with key=value pairs so they stay readable in a
    terminal and can still be parsed by a log shipper.
    """

    logger = logging.getLogger(namespace)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    logger.addHandler(handler)
    logger.setLevel(get_settings().LOG_LEVEL.upper())
    logger.propagate = False
    return logger


def get_logger(child: Optional[str] = None) -> logging.Logger:
    base = configure_logging()
    if child:
        return base.getChild(child)
    return base
