"""Centralized logging configuration.

All ``labelgraph`` modules log through child loggers of the ``labelgraph``
package logger, so one handler on the package logger covers the engine and
the API alike. Context travels in ``extra={...}``.
"""

import logging
import sys
from typing import Optional

from labelgraph.config import settings

PACKAGE_LOGGER = "labelgraph"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: Optional[str]) -> int:
    name = (level or settings.log_level or "INFO").upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach the stdout handler to the package logger once and set its level.

    Args:
        level: Log level name; defaults to ``settings.log_level``

    Returns:
        logging.Logger: The package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    log_level = _resolve_level(level)
    logger.setLevel(log_level)

    # Avoid duplicate handlers
    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(console_handler)
    for handler in logger.handlers:
        handler.setLevel(log_level)

    return logger


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Get a configured logger instance.

    Args:
        name: Logger name (typically __name__ of the calling module)
        level: Optional log level override (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        logging.Logger: Logger that propagates to the configured package logger
    """
    if not logging.getLogger(PACKAGE_LOGGER).handlers:
        configure_logging()
    logger = logging.getLogger(name)
    if level:
        logger.setLevel(_resolve_level(level))
    return logger
