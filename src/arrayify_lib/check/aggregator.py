# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from collections.abc import Iterable

from arrayify_lib.batch.interface import BatchInterface
from arrayify_lib.core.logger import get_logger
from arrayify_lib.properties.status import (
    StatusReport,
    TaskFailure,
    TaskState,
    exit_reason,
)

logger = get_logger(__name__)


def parse_status_lines(lines: Iterable[str]) -> StatusReport:
    """
    Sort the tasks of a job array into buckets by their state.

    Every line must contain the task name, its status code, and its exit code
    separated by whitespace. Lines with fewer fields are ignored.

    Args:
        lines (Iterable[str]): Status lines, one per task.

    Returns:
        StatusReport: Counts of tasks per state and the list of failed tasks.
    """
    report = StatusReport()

    for line in lines:
        fields = line.split()
        if len(fields) < 3:
            continue

        task_name, code, exit_code = fields[:3]
        match TaskState.fromCode(code):
            case TaskState.EXIT:
                report.failures.append(
                    TaskFailure(task_name, exit_code, exit_reason(exit_code))
                )
            case TaskState.RUN:
                report.running_count += 1
            case TaskState.PEND:
                report.pending_count += 1
            case TaskState.DONE:
                report.done_count += 1
            case _:
                report.other_count += 1

    return report


def aggregate(job_id: str, batch_system: type[BatchInterface]) -> StatusReport:
    """
    Query the batch system for the state of all tasks of a job array.

    The result is a snapshot; nothing is cached between calls.

    Args:
        job_id (str): Identifier of the job array.
        batch_system (type[BatchInterface]): Batch system the array was submitted to.

    Returns:
        StatusReport: Summary of the tasks.

    Raises:
        StatusQueryError: If the status query cannot be launched.
    """
    report = parse_status_lines(batch_system.queryStatus(job_id).splitlines())
    logger.debug(f"Status of job '{job_id}': {report}.")

    if report.total_count == 0:
        logger.warning(f"No tasks found for job '{job_id}'.")

    return report
