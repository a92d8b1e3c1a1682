"""Logging configuration for the client library."""

import logging
import sys

from skilllink.core.config import get_settings


def setup_logging() -> None:
    """Configure library-wide logging.

    Level is DEBUG when settings.debug is True, otherwise settings.log_level.
    Output goes to stdout. Host applications that configure logging
    themselves do not need to call this.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # httpx logs every request at INFO; keep Firestore chatter out of app logs
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name.

    Args:
        name: Usually __name__ of the calling module.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
