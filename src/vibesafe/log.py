"""Logging setup — diagnostics go to stderr through Rich, reports to stdout."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "vibesafe"


def configure_logging(*, verbose: bool = False, debug: bool = False) -> logging.Logger:
    """Attach a single RichHandler to the ``vibesafe`` logger and return it."""
    logger = logging.getLogger(LOGGER_NAME)
    if debug:
        logger.setLevel(logging.DEBUG)
    elif verbose:
        logger.setLevel(logging.INFO)
    else:
        logger.setLevel(logging.WARNING)

    logger.handlers.clear()
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=debug,
        show_path=debug,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger
