# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Small helpers shared by arrayify commands.
"""

from datetime import datetime
from pathlib import Path

from rich.console import Console

from .config import CFG
from .error import ArrayifyError

# encoding of the dispatch log
DISPATCH_LOG_ENCODING = "utf-8"


def construct_log_file_path(log_dir: Path, moment: datetime | None = None) -> Path:
    """
    Construct the path to the dispatch log of a submission.

    Args:
        log_dir (Path): Directory storing the logs.
        moment (datetime | None): Time of the submission. Defaults to now.

    Returns:
        Path: Path of the form `{log_dir}/{prefix}-{timestamp}.log`.
    """
    timestamp = (moment or datetime.now()).strftime(CFG.date_formats.log_timestamp)
    return log_dir / f"{CFG.log_prefix}-{timestamp}.log"


def read_dispatch_log(log_file: Path) -> list[str]:
    """
    Read the commands stored in a dispatch log, in task-index order.

    Lines are split on '\\n' only, the same way `sed` addresses them
    in the wrapper script of the tasks.

    Args:
        log_file (Path): Path to the dispatch log.

    Returns:
        list[str]: Commands, the first one belonging to task 1.

    Raises:
        ArrayifyError: If the file cannot be read.
    """
    try:
        with log_file.open(encoding=DISPATCH_LOG_ENCODING, newline="\n") as file:
            return [line.removesuffix("\n") for line in file]
    except (OSError, UnicodeDecodeError) as e:
        raise ArrayifyError(f"Could not read dispatch log '{log_file}': {e}.") from e


def get_panel_width(
    console: Console, factor: int, min_width: int | None, max_width: int | None
) -> int:
    """
    Calculate the width of a panel relative to the console width, constrained by
    optional minimum and maximum width values.

    Args:
        console (Console): A rich Console-like object that provides terminal size.
        factor (int): A divisor used to scale down the terminal width.
        min_width (int): The minimum allowable panel width. If None, no lower bound is applied.
        max_width (int): The maximum allowable panel width. If None, no upper bound is applied.

    Returns:
        int: The computed panel width after applying scaling and bounds.
    """
    panel_width = console.size.width // factor
    if min_width is not None:
        panel_width = max(panel_width, min_width)
    if max_width is not None:
        panel_width = min(panel_width, max_width)

    return panel_width
