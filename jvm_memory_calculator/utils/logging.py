"""Logging configuration and setup utilities.

This module provides logging setup for CLI and programmatic use:
- Rich console handler for the package logger
- Log level configuration
"""
import logging
from typing import Union

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "jvm_memory_calculator"


def setup_logging(level: Union[int, str] = logging.WARNING) -> logging.Logger:
    """Attach a RichHandler to the package logger and set its level.

    Calling it again only updates the level; handlers are never stacked.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved

    logger = logging.getLogger(PACKAGE_LOGGER)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True), show_path=False, rich_tracebacks=True
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
