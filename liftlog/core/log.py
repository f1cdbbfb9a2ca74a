"""Logging setup for the liftlog package."""

import logging

from liftlog.core.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
HANDLER_NAME = "liftlog-console"


def configure_logging(settings: Settings | None = None) -> logging.Logger:
    """Set the package logger level and attach a stream handler (once)."""
    settings = settings or get_settings()
    logger = logging.getLogger("liftlog")
    level = logging.DEBUG if settings.debug else logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logger.setLevel(level)
    if not any(h.get_name() == HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
