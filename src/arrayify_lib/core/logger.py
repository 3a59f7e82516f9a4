# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from .config import CFG


def get_logger(name: str, show_time: bool = False) -> logging.Logger:
    """
    Return a logger writing colored records to stderr.

    Setting the debug environment variable lowers the level to DEBUG and adds
    timestamps and source locations to the records.

    Args:
        name (str): Name of the logger, usually `__name__`.
        show_time (bool): Print timestamps even outside of debug mode.

    Returns:
        logging.Logger: The configured logger.
    """
    debug_mode = _is_debug_mode()
    level = logging.DEBUG if debug_mode else logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    # modules reloaded in the same process must not duplicate the output
    if not logger.handlers:
        logger.addHandler(_create_handler(level, show_time or debug_mode, debug_mode))

    return logger


def _is_debug_mode() -> bool:
    return os.environ.get(CFG.env_vars.debug_mode) is not None


def _create_handler(level: int, show_time: bool, show_path: bool) -> RichHandler:
    # log messages contain user commands and paths, never rich markup
    handler = RichHandler(
        console=Console(stderr=True),
        markup=False,
        rich_tracebacks=True,
        show_level=True,
        show_time=show_time,
        show_path=show_path,
        log_time_format=CFG.date_formats.standard,
    )
    handler.setLevel(level)

    return handler
