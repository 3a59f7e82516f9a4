# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import shlex
import shutil
import subprocess

from arrayify_lib.batch.interface import BatchInterface, BatchMeta
from arrayify_lib.core.config import CFG
from arrayify_lib.core.error import StatusQueryError, SubmissionExecError
from arrayify_lib.core.logger import get_logger
from arrayify_lib.properties.submission import ArraySubmission

logger = get_logger(__name__)


class LSF(BatchInterface, metaclass=BatchMeta):
    """
    Implementation of BatchInterface for the IBM Spectrum LSF batch system.
    """

    def envName() -> str:
        return "LSF"

    def isAvailable() -> bool:
        return shutil.which(CFG.lsf.submit_binary) is not None

    def jobSubmit(submission: ArraySubmission) -> str:
        command = LSF._translateSubmit(submission)
        logger.debug(command)

        # the wrapper script is read by bsub from its standard input
        try:
            result = subprocess.run(
                ["bash", "-c", command],
                input=submission.script,
                text=True,
                check=False,
                capture_output=True,
                errors="replace",
            )
        except OSError as e:
            raise SubmissionExecError(
                f"Could not launch '{CFG.lsf.submit_binary}': {e}."
            ) from e

        if result.returncode != 0:
            logger.warning(
                f"'{CFG.lsf.submit_binary}' exited with code {result.returncode}: {result.stderr.strip()}"
            )

        return result.stdout

    def queryStatus(job_id: str) -> str:
        command = LSF._translateStatus(job_id)
        logger.debug(command)

        try:
            result = subprocess.run(
                ["bash", "-c", command],
                text=True,
                check=False,
                capture_output=True,
                errors="replace",
            )
        except OSError as e:
            raise StatusQueryError(
                f"Could not launch '{CFG.lsf.status_binary}': {e}."
            ) from e

        # bjobs reports unknown jobs on stderr while still printing other tasks
        if stderr := result.stderr.strip():
            logger.warning(stderr)

        return result.stdout

    @staticmethod
    def _translateSubmit(submission: ArraySubmission) -> str:
        """
        Generate the bsub command submitting a job array.

        Args:
            submission (ArraySubmission): Description of the job array.

        Returns:
            str: The fully constructed bsub command string.
        """
        array_spec = f"{submission.name}[1-{submission.size}]%{submission.batch_size}"
        resources = (
            f"select[mem>{submission.memory}] rusage[mem={submission.memory}]"
        )

        return (
            f"{CFG.lsf.submit_binary} -J {shlex.quote(array_spec)} "
            f"-q {shlex.quote(submission.queue)} "
            f"-n {submission.threads} "
            f"-M {submission.memory} "
            f'-R "{resources}" '
            f"-o {shlex.quote(submission.stdout)} "
            f"-e {shlex.quote(submission.stderr)}"
        )

    @staticmethod
    def _translateStatus(job_id: str) -> str:
        """
        Generate the bjobs command listing all tasks of a job array.

        Args:
            job_id (str): Identifier of the job array.

        Returns:
            str: The bjobs command string.
        """
        return (
            f"{CFG.lsf.status_binary} -noheader "
            f'-o "{CFG.lsf.status_fields}" {shlex.quote(job_id)}'
        )


# register LSF
BatchMeta.register(LSF)
