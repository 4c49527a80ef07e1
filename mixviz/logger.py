"""
Logging setup for the mixture plot analyzer.

Usage:
    from mixviz.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Loaded %d rows from %s", n_rows, file_name)
"""

import logging
import os
import sys

LOG_LEVEL_ENV = 'MIXVIZ_LOG_LEVEL'

_configured = False


def setup_logging(level: str = None) -> None:
    """Configure root logging for the app.

    Call once at startup (app.py). Subsequent calls are no-ops.
    The level defaults to ``$MIXVIZ_LOG_LEVEL`` or INFO.
    """
    global _configured
    if _configured:
        return

    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, 'INFO')

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger for a module (typically ``__name__``)."""
    return logging.getLogger(name)
