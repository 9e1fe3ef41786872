"""
Logging for the storefront core.

Usage:
    from storefront.logging import get_logger, sanitize_id_for_logging
    logger = get_logger(__name__)

    logger.info("Cart bound to %s", sanitize_id_for_logging(user_id))

Everything logs under the ``storefront`` namespace. A handler is attached
only when the host application has not configured logging itself. User
ids and free text (briefs, server messages) are never logged raw.
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PACKAGE_LOGGER = "storefront"
ANONYMOUS_LABEL = "anonymous"
USER_ID_LOG_LENGTH = 8

# Characters that could forge extra log entries (CWE-117)
_LOG_INJECTION = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": None})


def _configure_package_logger() -> None:
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    package_logger.setLevel(getattr(logging, level_name, logging.INFO))

    if package_logger.handlers or logging.getLogger().handlers:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)


_configure_package_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    """Logger for a storefront module (pass ``__name__``)."""
    return logging.getLogger(name)


def sanitize_id_for_logging(user_id: str | None) -> str:
    """
    Log label for a cart owner.

    Anonymous sessions render as "anonymous" so partition switches read
    clearly; real ids are escaped and cut to their first 8 characters.
    """
    if not user_id:
        return ANONYMOUS_LABEL
    return str(user_id).translate(_LOG_INJECTION)[:USER_ID_LOG_LENGTH]


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """Escape and truncate free text before logging it."""
    if not value:
        return "N/A"
    safe_value = str(value).translate(_LOG_INJECTION)
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."


__all__ = [
    "ANONYMOUS_LABEL",
    "get_logger",
    "sanitize_id_for_logging",
    "sanitize_string_for_logging",
]
