"""
Logging for the marketplace package.

Usage:
    from marketplace.logging import get_logger
    logger = get_logger(__name__)

Only the ``marketplace`` logger tree is configured, once on import, so an
embedding application keeps control of the root logger. ``LOG_LEVEL``
sets the level; ``MARKETPLACE_ENV=production`` drops timestamps.
"""

import logging
import os
import re
import sys
from functools import cache

PACKAGE_LOGGER = "marketplace"

_DEV_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
_PROD_FORMAT = "%(levelname)s %(name)s: %(message)s"

# Loggers of the Upstash client stack, chatty at INFO
_QUIET_LOGGERS = ("upstash_redis", "httpx", "httpcore")

# Generated ids: user_/prod_/ord_ followed by 8 base36 characters
_ID_PATTERN = re.compile(r"^[a-z]+_[a-z0-9]{8}$")
_MAX_ID_LENGTH = 24


def _configure_package_logger() -> None:
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if package_logger.handlers:
        return

    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    package_logger.setLevel(getattr(logging, level_name, logging.INFO))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    # Leave output to the application if it already set up the root logger
    if logging.getLogger().handlers:
        return

    handler = logging.StreamHandler(sys.stdout)
    production = os.environ.get("MARKETPLACE_ENV", "").lower() == "production"
    handler.setFormatter(logging.Formatter(_PROD_FORMAT if production else _DEV_FORMAT))
    package_logger.addHandler(handler)
    package_logger.propagate = False


_configure_package_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    """Logger for a module of this package (pass ``__name__``)."""
    return logging.getLogger(name)


def _escape(value: str) -> str:
    # Keep user input on one log line (CWE-117)
    return value.replace("\r", "\\r").replace("\n", "\\n").replace("\t", "\\t").replace("\x00", "")


def sanitize_id_for_logging(id_value: str | None) -> str:
    """
    Render a record id for a log line.

    Generated ids (``prod_k3j9x0ab``) and short sentinels such as
    ``system`` are kept whole; anything else is escaped and cut to 24
    characters.
    """
    if not id_value:
        return "N/A"
    value = str(id_value)
    if _ID_PATTERN.match(value):
        return value
    value = _escape(value)
    return value if len(value) <= _MAX_ID_LENGTH else value[:_MAX_ID_LENGTH] + "..."


def mask_email_for_logging(email: str | None) -> str:
    """``test@example.com`` -> ``te***@example.com``."""
    if not email:
        return "N/A"
    local, sep, domain = _escape(str(email)).partition("@")
    if not sep:
        return local[:2] + "***"
    return f"{local[:2]}***@{domain}"


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """Escape free text such as product titles and cut it to max_length."""
    if not value:
        return "N/A"
    safe_value = _escape(str(value))
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."


__all__ = [
    "get_logger",
    "mask_email_for_logging",
    "sanitize_id_for_logging",
    "sanitize_string_for_logging",
]
