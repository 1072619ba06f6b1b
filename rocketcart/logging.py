"""
Logging for RocketCart.

All package loggers live under the "rocketcart" namespace. That namespace
gets one stdout handler at import time; records still propagate, so an
application that configures the root logger sees them too.

Usage:
    from rocketcart.logging import get_logger
    logger = get_logger(__name__)

    logger.info("Cart restored with %d item(s)", len(cart))
"""

import logging
import os
import sys
from functools import cache
from typing import Optional, TextIO

PACKAGE_LOGGER = "rocketcart"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that are chatty at INFO during inventory calls
_QUIET_LOGGERS = ("httpx", "httpcore", "tenacity")


def _level_from_env() -> int:
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def configure_logging(level: Optional[int] = None, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Attach a handler to the package logger. Calling it again only updates the level.

    Args:
        level: Logging level; defaults to LOG_LEVEL from the environment
        stream: Output stream; defaults to stdout

    Returns:
        The package logger
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level if level is not None else _level_from_env())

    if not package_logger.handlers:
        handler = logging.StreamHandler(stream or sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return package_logger


configure_logging()


@cache
def get_logger(name: str) -> logging.Logger:
    """Logger for a module; names outside the package are nested under it."""
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def sanitize_string_for_logging(value: object, max_length: int = 50) -> str:
    """
    Make a value safe to log: control characters escaped (CWE-117), length capped.

    Product titles and error details come from the inventory service, so they
    are treated as untrusted.
    """
    if value is None or value == "":
        return "N/A"
    safe_value = (
        str(value)
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."


__all__ = [
    "LOG_FORMAT",
    "PACKAGE_LOGGER",
    "configure_logging",
    "get_logger",
    "sanitize_string_for_logging",
]
