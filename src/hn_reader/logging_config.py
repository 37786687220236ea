"""Logging configuration for hn-reader."""

import sys

from loguru import logger

_VERBOSE_FORMAT = "{time:HH:mm:ss.SSS} {level.icon} [{thread.name}] {message}"


def configure_logging(*, verbose: bool = False) -> None:
    """Configure loguru; debug output names the thread each fetch ran on."""
    logger.remove()
    if verbose:
        logger.add(sys.stderr, level="DEBUG", format=_VERBOSE_FORMAT)
    else:
        logger.add(sys.stderr, level="INFO", format="{level.icon} {message}")
