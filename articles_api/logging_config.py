"""Centralized logging configuration.

Usage:
    from articles_api.logging_config import setup_logging
    setup_logging(settings)   # once at startup
"""

import logging
import sys

from articles_api.config import Settings

# Loggers silenced/raised together through LOG_LEVEL_SQL.
_SQL_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite", "asyncpg")

_LOCAL_FORMAT = "%(levelname)-8s %(name)s: %(message)s"
_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_ISO_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


def setup_logging(settings: Settings) -> None:
    """Apply root and SQL log levels; add a stderr handler if none exists.

    ``APP_ENV=local`` gets a compact console format; every other
    environment gets ISO-8601 timestamps.
    """
    root = logging.getLogger()
    root.setLevel(_parse_level(settings.LOG_LEVEL))

    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        if settings.APP_ENV == "local":
            handler.setFormatter(logging.Formatter(_LOCAL_FORMAT))
        else:
            handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT, datefmt=_ISO_DATEFMT))
        root.addHandler(handler)

    sql_level = _parse_level(settings.LOG_LEVEL_SQL)
    for name in _SQL_LOGGERS:
        logging.getLogger(name).setLevel(sql_level)

    logging.getLogger(__name__).debug(
        "Logging configured: env=%s root=%s sql=%s",
        settings.APP_ENV,
        settings.LOG_LEVEL,
        settings.LOG_LEVEL_SQL,
    )


def _parse_level(raw: str) -> int:
    """Convert a level name string to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
