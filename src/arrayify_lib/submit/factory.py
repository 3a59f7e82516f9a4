# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from pathlib import Path

from arrayify_lib.batch.interface import BatchInterface, BatchMeta
from arrayify_lib.core.logger import get_logger
from arrayify_lib.properties.input_source import (
    InputSource,
    PairedDirectory,
    TabularFile,
)
from arrayify_lib.properties.submission import SubmissionPlan
from arrayify_lib.resolve import resolve

from .planner import compute_batch_size
from .submitter import Submitter

logger = get_logger(__name__)


class SubmitterFactory:
    """
    Class to construct a Submitter from the options of `arrayify sub`.
    """

    def __init__(
        self,
        command: str,
        csv: str | None = None,
        dir: str | None = None,
        job_prefix: str = "arrayify",
        log: str = "logs",
        memory: int = 1,
        threads: int = 1,
        batch_size: int | None = None,
        queue: str = "normal",
        delimiter: str | None = None,
        batch_system: str | None = None,
    ):
        """
        Initialize the factory with the submission options.

        Args:
            command (str): Command template.
            csv (str | None): Path to a tabular input file.
            dir (str | None): Path to a directory of paired files.
            job_prefix (str): Prefix of the job array name.
            log (str): Directory for the dispatch log and the task output.
            memory (int): Memory per task in GB.
            threads (int): Number of threads per task.
            batch_size (int | None): Requested batch size. Computed from the number of jobs if None.
            queue (str): Queue to submit to.
            delimiter (str | None): Field delimiter of the tabular file.
            batch_system (str | None): Name of the batch system.

        Raises:
            ValueError: If not exactly one of `csv` and `dir` is provided.
        """
        if (csv is None) == (dir is None):
            raise ValueError("Exactly one of 'csv' and 'dir' must be provided.")

        self._command = command
        self._source = self._getInputSource(csv, dir, delimiter)
        self._job_prefix = job_prefix
        self._log_dir = Path(log)
        self._memory = memory
        self._threads = threads
        self._batch_size = batch_size
        self._queue = queue
        self._batch_system = batch_system

    def makeSubmitter(self) -> Submitter | None:
        """
        Resolve the jobs and construct a Submitter.

        Returns:
            Submitter | None: A configured Submitter, or None if the input contains no jobs.

        Raises:
            ArrayifyError: If the input cannot be resolved or no batch system is available.
        """
        jobs = resolve(self._source, self._command)
        if not jobs:
            return None

        BatchSystem = self._getBatchSystem()
        plan = SubmissionPlan(
            job_prefix=self._job_prefix,
            log_dir=self._log_dir,
            memory_gb=self._memory,
            threads=self._threads,
            queue=self._queue,
            batch_size=compute_batch_size(len(jobs), self._batch_size),
        )
        logger.debug(f"Submission plan: {plan}.")

        return Submitter(BatchSystem, jobs, plan)

    def getInputSource(self) -> InputSource:
        """Get the source the jobs are resolved from."""
        return self._source

    def _getBatchSystem(self) -> type[BatchInterface]:
        """
        Get the batch system from the options, environment variable, or by guessing.
        """
        return BatchMeta.obtain(self._batch_system)

    @staticmethod
    def _getInputSource(
        csv: str | None, dir: str | None, delimiter: str | None
    ) -> InputSource:
        if csv is not None:
            return TabularFile(Path(csv), delimiter)

        return PairedDirectory(Path(dir))
