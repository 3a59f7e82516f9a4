# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import re
import shlex
from pathlib import Path

from arrayify_lib.batch.interface import BatchInterface
from arrayify_lib.core.common import (
    DISPATCH_LOG_ENCODING,
    construct_log_file_path,
    read_dispatch_log,
)
from arrayify_lib.core.config import CFG
from arrayify_lib.core.error import ArrayifyError, SubmissionExecError
from arrayify_lib.core.logger import get_logger
from arrayify_lib.properties.job_spec import JobSpec
from arrayify_lib.properties.submission import (
    ArraySubmission,
    SubmissionPlan,
    SubmissionResult,
)

logger = get_logger(__name__)

# job ID reported when the reply of the batch system contains none
UNKNOWN_JOB_ID = "unknown"


class Submitter:
    """
    Class to submit a list of jobs as a single job array.

    Responsibilities:
        - Write the dispatch log holding one command per line, in task order.
        - Render the wrapper script which executes the command of one task.
        - Hand the job array over to the batch system and parse the job ID.

    The dispatch log is both the audit log of the submission and the table
    the wrapper script reads its command from, so it is written before
    the job array is submitted.
    """

    def __init__(
        self,
        batch_system: type[BatchInterface],
        jobs: list[JobSpec],
        plan: SubmissionPlan,
    ):
        """
        Initialize a Submitter instance.

        Args:
            batch_system (type[BatchInterface]): The batch system class used for submission.
            jobs (list[JobSpec]): Jobs to submit, indexed contiguously from 1.
            plan (SubmissionPlan): Settings of the submission.

        Raises:
            SubmissionExecError: If there are no jobs or their indices are not contiguous.
        """
        if not jobs:
            raise SubmissionExecError("Nothing to submit: the list of jobs is empty.")

        if [job.index for job in jobs] != list(range(1, len(jobs) + 1)):
            raise SubmissionExecError("Job indices must be contiguous and start at 1.")

        self._batch_system = batch_system
        self._jobs = jobs
        self._plan = plan

    def submit(self) -> SubmissionResult:
        """
        Write the dispatch log and submit the job array.

        Returns:
            SubmissionResult: ID of the job array, path to the dispatch log,
            and the number of submitted tasks.

        Raises:
            SubmissionExecError: If the dispatch log cannot be written
                or the submission command cannot be launched.
        """
        log_file = self._writeDispatchLog()
        job_count = self._countLines(log_file)

        submission = ArraySubmission(
            name=f"{self._plan.job_prefix}{CFG.lsf.array_suffix}",
            size=job_count,
            batch_size=self._plan.batch_size,
            queue=self._plan.queue,
            threads=self._plan.threads,
            memory=self._plan.memory_gb * CFG.lsf.memory_factor,
            stdout=str(self._plan.log_dir / CFG.lsf.stdout_pattern),
            stderr=str(self._plan.log_dir / CFG.lsf.stderr_pattern),
            script=self.renderScript(log_file),
        )

        reply = self._batch_system.jobSubmit(submission)
        job_id = parse_job_id(reply)
        if job_id == UNKNOWN_JOB_ID:
            logger.warning(
                f"Could not find a job ID in the reply of the batch system: '{reply.strip()}'."
            )

        return SubmissionResult(job_id=job_id, log_file=log_file, job_count=job_count)

    def getPlan(self) -> SubmissionPlan:
        """Get the settings of the submission."""
        return self._plan

    def getBatchSystem(self) -> type[BatchInterface]:
        """Get the batch system used for submitting."""
        return self._batch_system

    @staticmethod
    def renderScript(log_file: Path) -> str:
        """
        Render the wrapper script executed by every task of the job array.

        The script selects the line of the dispatch log matching the task index
        and executes it as a shell command.

        Args:
            log_file (Path): Path to the dispatch log.

        Returns:
            str: The wrapper script.
        """
        index_var = CFG.env_vars.task_index
        log = shlex.quote(str(log_file.resolve()))
        return (
            "#!/bin/bash\n"
            "\n"
            f'COMMAND=$(sed -n "${{{index_var}}}p" {log})\n'
            'eval "$COMMAND"\n'
        )

    def _writeDispatchLog(self) -> Path:
        """
        Write one command per line into a new dispatch log.

        Returns:
            Path: Path to the written dispatch log.

        Raises:
            SubmissionExecError: If the log directory or the log cannot be created.
        """
        try:
            self._plan.log_dir.mkdir(parents=True, exist_ok=True)
            log_file = construct_log_file_path(self._plan.log_dir)
            # never overwrite the dispatch log of another submission
            file = log_file.open("x", encoding=DISPATCH_LOG_ENCODING, newline="\n")
        except OSError as e:
            raise SubmissionExecError(
                f"Could not write dispatch log into '{self._plan.log_dir}': {e}."
            ) from e

        try:
            with file:
                for job in self._jobs:
                    file.write(f"{job.command}\n")
        except (OSError, UnicodeEncodeError) as e:
            # no task can run from an incomplete log
            log_file.unlink(missing_ok=True)
            raise SubmissionExecError(
                f"Could not write dispatch log '{log_file}': {e}."
            ) from e

        logger.debug(f"Wrote {len(self._jobs)} commands into '{log_file}'.")
        return log_file

    @staticmethod
    def _countLines(log_file: Path) -> int:
        """
        Count the commands stored in a dispatch log.
        """
        try:
            return len(read_dispatch_log(log_file))
        except ArrayifyError as e:
            raise SubmissionExecError(str(e)) from e


def parse_job_id(reply: str) -> str:
    """
    Extract the job ID from the reply of the batch system.

    Args:
        reply (str): Text printed by the submission command.

    Returns:
        str: The numeric job ID, or 'unknown' if the reply contains none.
    """
    if match := re.search(CFG.lsf.job_id_pattern, reply):
        return match.group(1)

    return UNKNOWN_JOB_ID
