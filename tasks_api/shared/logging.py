"""Logging configuration for the application."""

import logging
import sys

from tasks_api.core.config import get_settings

# Libraries that log every outbound store request at INFO.
_CHATTY_LOGGERS = ("httpx", "httpcore", "google.auth")


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO, with the
    HTTP client libraries held at WARNING so each Firestore call is not
    logged. Output goes to stdout.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(log_level if settings.debug else logging.WARNING)
