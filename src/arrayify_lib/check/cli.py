# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import sys
from typing import NoReturn

import click
from click_help_colors import HelpColorsCommand
from rich.console import Console

from arrayify_lib.batch.interface import BatchMeta
from arrayify_lib.check.aggregator import aggregate
from arrayify_lib.check.presenter import StatusPresenter
from arrayify_lib.core.config import CFG
from arrayify_lib.core.error import ArrayifyError
from arrayify_lib.core.logger import get_logger

logger = get_logger(__name__)


@click.command(
    short_help="Check the status of a submitted job array.",
    help=f"""
Check the status of the tasks of a job array.

{click.style("JOB_ID", fg="green")}   The ID of the job array, as printed by `{CFG.binary_name} sub`.
""",
    cls=HelpColorsCommand,
    help_options_color="bright_blue",
)
@click.argument("job_id", type=str, metavar=click.style("JOB_ID", fg="green"))
@click.option(
    "--batch-system",
    type=str,
    default=None,
    help=f"Name of the batch system to query. If not specified, the system will use the environment variable '{CFG.env_vars.batch_system}' or attempt to auto-detect it.",
)
def check(job_id: str, batch_system: str | None) -> NoReturn:
    """
    Print the state of the tasks of a job array.
    """
    try:
        BatchSystem = BatchMeta.obtain(batch_system)
        report = aggregate(job_id, BatchSystem)

        console = Console(record=False, markup=False)
        panel = StatusPresenter(job_id, report).createStatusPanel(console)
        console.print(panel)
        sys.exit(0)
    except ArrayifyError as e:
        logger.error(e)
        print()
        sys.exit(CFG.exit_codes.default)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        print()
        sys.exit(CFG.exit_codes.unexpected_error)
