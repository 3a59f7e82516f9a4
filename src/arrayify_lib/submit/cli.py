# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import sys
from typing import NoReturn

import click
from click_help_colors import HelpColorsCommand
from click_option_group import RequiredMutuallyExclusiveOptionGroup, optgroup
from rich.console import Console
from rich.markup import escape

from arrayify_lib.core.config import CFG
from arrayify_lib.core.error import ArrayifyError
from arrayify_lib.core.logger import get_logger
from arrayify_lib.properties.input_source import InputSource
from arrayify_lib.properties.submission import SubmissionPlan, SubmissionResult
from arrayify_lib.submit.factory import SubmitterFactory

logger = get_logger(__name__)


def _parse_batch_size(
    _ctx: click.Context, _param: click.Parameter, value: str
) -> int | None:
    """
    Convert the value of `--batch` into a batch size; 'auto' means None.
    """
    if value == "auto":
        return None

    try:
        batch_size = int(value)
    except ValueError:
        raise click.BadParameter(f"'{value}' is neither 'auto' nor an integer.")

    if batch_size < 1:
        raise click.BadParameter("Batch size must be at least 1.")

    return batch_size


@click.command(
    short_help="Submit a job array from a CSV file or a directory.",
    help=f"""
Submit a job array built from a CSV file or a directory of paired files.

Every row of the CSV file, or every pair of files in the directory, becomes one task
of the job array. The command template may contain placeholders enclosed in braces:
CSV headers for a CSV file, and {click.style("{ID}", fg="green")}, {click.style("{R1}", fg="green")}, and {click.style("{R2}", fg="green")} for a directory.

Example: {CFG.binary_name} sub -s samples.csv -c 'echo {{sample}} {{reads}}'
""",
    cls=HelpColorsCommand,
    help_options_color="bright_blue",
)
@optgroup.group(
    f"{click.style('Input', fg='yellow')}",
    cls=RequiredMutuallyExclusiveOptionGroup,
)
@optgroup.option(
    "--csv",
    "-s",
    "csv",
    type=str,
    default=None,
    help="Path to the CSV file containing job information. Headers are used as placeholders in the command template.",
)
@optgroup.option(
    "--dir",
    "-d",
    "dir",
    type=str,
    default=None,
    help="Path to the directory containing input files. Files are paired by their '_1' and '_2' markers; the placeholders are ID, R1, and R2.",
)
@optgroup.group(f"{click.style('General settings', fg='yellow')}")
@optgroup.option(
    "--command",
    "-c",
    type=str,
    required=True,
    help="Command template using placeholders, e.g. 'echo {ID} {R1} {R2}'.",
)
@optgroup.option(
    "--job_prefix",
    "--job-prefix",
    "-p",
    "job_prefix",
    type=str,
    default=CFG.submit_defaults.job_prefix,
    show_default=True,
    help="Prefix of the job array name, i.e. <prefix>_job_array.",
)
@optgroup.option(
    "--log",
    "-l",
    type=str,
    default=CFG.submit_defaults.log_dir,
    show_default=True,
    help="Directory to store the dispatch log and the output of the tasks.",
)
@optgroup.option(
    "--queue",
    "-q",
    type=str,
    default=CFG.submit_defaults.queue,
    show_default=True,
    help="Name of the queue to submit the job array to.",
)
@optgroup.option(
    "--delimiter",
    type=str,
    default=None,
    help="Field delimiter of the CSV file. Defaults to a tab for .tsv files and a comma otherwise.",
)
@optgroup.option(
    "--batch-system",
    type=str,
    default=None,
    help=f"Name of the batch system to submit to. If not specified, the system will use the environment variable '{CFG.env_vars.batch_system}' or attempt to auto-detect it.",
)
@optgroup.group(f"{click.style('Requested resources', fg='yellow')}")
@optgroup.option(
    "--memory",
    "-m",
    type=click.IntRange(min=1),
    default=CFG.submit_defaults.memory_gb,
    show_default=True,
    help="Amount of memory per task in GB.",
)
@optgroup.option(
    "--threads",
    "-t",
    type=click.IntRange(min=1),
    default=CFG.submit_defaults.threads,
    show_default=True,
    help="Number of threads per task.",
)
@optgroup.option(
    "--batch",
    "-b",
    "batch_size",
    type=str,
    default="auto",
    show_default=True,
    callback=_parse_batch_size,
    help="Number of tasks running concurrently. 'auto' allows 20% of the array.",
)
def sub(**kwargs) -> NoReturn:
    """
    Submit a job array from a CSV file or a directory.
    """
    try:
        factory = SubmitterFactory(**kwargs)
        submitter = factory.makeSubmitter()

        # empty input is not an error
        if submitter is None:
            logger.warning("No jobs found.")
            sys.exit(0)

        result = submitter.submit()
        _print_run_stats(
            result,
            submitter.getPlan(),
            factory.getInputSource(),
            str(submitter.getBatchSystem()),
        )
        sys.exit(0)
    except ArrayifyError as e:
        logger.error(e)
        sys.exit(CFG.exit_codes.default)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)


def _print_run_stats(
    result: SubmissionResult,
    plan: SubmissionPlan,
    source: InputSource,
    batch_system: str,
) -> None:
    """
    Print a summary of the submission to stdout.
    """
    console = Console(highlight=False)
    console.print("[bold]Job submission complete![/bold]")
    console.print(f"Job ID is: [bold]{result.job_id}[/bold]")
    console.print(
        f"{result.job_count} jobs from {escape(str(source.path))} submitted to {batch_system}, "
        f"at most {plan.batch_size} running at a time."
    )
    console.print(f"Job commands logged in: {escape(str(result.log_file))}")
    console.print(f"Logs can be found in: {escape(str(plan.log_dir))}")
    console.print(f"Track with:\n   {CFG.binary_name} check {result.job_id}")
