"""Logging setup for the resource search engine.

The package only creates its logger. Applications that want the request-id
prefix in their output call configure_logging() during startup.
"""

import logging
import sys
from contextvars import ContextVar

LOGGER_NAME = "resource-search"
LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(request_id)s%(message)s"

# Context variable to store request_id across async calls
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


class RequestIdFilter(logging.Filter):
    """Logging filter that adds request_id to log records."""

    def filter(self, record):
        """Add request_id to the log record if available."""
        request_id = request_id_ctx.get()
        record.request_id = f"[{request_id}] " if request_id else ""
        return True


def configure_logging(debug: bool | None = None) -> logging.Logger:
    """Install a stderr handler with request ids and return the package logger.

    Args:
        debug: Log at DEBUG level; defaults to Settings.debug
            (RESOURCE_SEARCH_DEBUG)

    Returns:
        The "resource-search" logger
    """
    if debug is None:
        from resource_search.config import get_settings

        debug = get_settings().debug

    logging.basicConfig(
        level=logging.INFO,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    # Module loggers propagate to root, so the filter goes on its handlers
    for handler in logging.root.handlers:
        if not any(isinstance(f, RequestIdFilter) for f in handler.filters):
            handler.addFilter(RequestIdFilter())

    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    if debug:
        package_logger.debug("Debug mode enabled")
    return package_logger


logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())
