"""Logging setup for the StackIt service.

Call :func:`configure_logging` once at process start (``stackit.main`` does
this). Modules obtain their own logger with ``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import logging

from stackit.core.settings import settings

ROOT_LOGGER_NAME = "stackit"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _parse_level(value: str | None) -> int:
    """Map a string log level (e.g. 'DEBUG', 'info') to a logging constant."""
    if not value:
        return logging.INFO
    level = getattr(logging, value.strip().upper(), None)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: str | None = None, *, force: bool = False) -> logging.Logger:
    """Attach a stream handler to the package logger and return it.

    Args:
        level: Level name overriding ``settings.log_level``.
        force: Replace handlers installed by a previous call.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(_parse_level(level or settings.log_level))

    if logger.handlers and not force:
        return logger

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
