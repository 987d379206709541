"""Utilities to configure logging from environment settings."""

from __future__ import annotations

import logging

from movie_catalog.core.config import get_settings

# httpx logs each request URL at INFO, and every TMDb URL carries api_key.
_HTTP_LOGGERS = ("httpx", "httpcore")


def quiet_http_loggers() -> None:
    """Keep HTTP client request lines out of INFO logs."""

    for name in _HTTP_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def configure_logging() -> None:
    """Apply LOG_LEVEL from settings to the package loggers."""

    settings = get_settings()
    quiet_http_loggers()
    logging.getLogger("movie_catalog").setLevel(settings.log_level)
