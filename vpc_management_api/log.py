"""Logging setup for the Lambda functions."""

import sys

from loguru import logger

LOG_FORMAT = "{level: <8} | {name}:{function}:{line} - {message}"


def setup_logging(level: str = "INFO") -> None:
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level, colorize=False)
