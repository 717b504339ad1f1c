"""Logging configuration for refcache and its host scripts."""

import logging
import sys

from refcache.core.config import get_settings

# Third-party loggers that are noisy at DEBUG and rarely useful for cache work.
_QUIET_LOGGERS = ("asyncio", "redis")


def setup_logging(level: int | None = None) -> None:
    """Configure process-wide logging to stdout.

    Level is DEBUG when settings.debug is True, otherwise INFO, unless given.
    SQL statement logging follows settings.database_echo only.
    """
    settings = get_settings()
    log_level = level if level is not None else (logging.DEBUG if settings.debug else logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.INFO))
    if not settings.database_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name.

    Args:
        name: Usually __name__ of the calling module.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
