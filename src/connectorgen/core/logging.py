"""Logging setup for connectorgen.

Everything logs under the `connectorgen` logger. Console output goes to
stderr because stdout carries generated connector JSON.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

ROOT_LOGGER = "connectorgen"

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def _handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def configure_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    console: bool = True,
) -> logging.Logger:
    """Install handlers on the package logger, replacing earlier ones.

    Args:
        level: Threshold for the logger and its handlers
        log_file: Also append records to this file (parent dirs are created)
        console: Write records to stderr

    Returns:
        The configured `connectorgen` logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    if console:
        logger.addHandler(_handler(logging.StreamHandler(sys.stderr), level))

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.addHandler(_handler(logging.FileHandler(log_file, encoding="utf-8"), level))

    return logger


def setup_logging(verbose: bool = False) -> logging.Logger:
    """CLI logging: DEBUG with --verbose, otherwise warnings only."""
    return configure_logging(level=logging.DEBUG if verbose else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


configure_logging()
