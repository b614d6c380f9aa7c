"""Logging setup for the derbysim package."""

import logging

from rich.logging import RichHandler

PACKAGE_LOGGER = "derbysim"


def configure_logging(level: int = logging.INFO) -> logging.Logger:
    """Attach a Rich handler to the package logger.

    Args:
        level: Logging level for derbysim loggers

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    handler = RichHandler(markup=False, show_path=False, show_time=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False
    return logger
