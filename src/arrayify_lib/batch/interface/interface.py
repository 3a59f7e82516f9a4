# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


from abc import ABC

from arrayify_lib.properties.submission import ArraySubmission


class BatchInterface(ABC):
    """
    Abstract base class for batch system integrations.

    Concrete batch system classes must implement these methods to allow
    arrayify to submit job arrays and query their state uniformly.

    Implementations return the raw text produced by the batch system;
    interpreting it is left to the callers.
    """

    @staticmethod
    def envName() -> str:
        """
        Return the name of the batch system environment.

        Returns:
            str: The batch system name.
        """
        raise NotImplementedError(
            "envName method is not implemented for this batch system implementation"
        )

    @staticmethod
    def isAvailable() -> bool:
        """
        Determine whether the batch system is available on the current host.

        Returns:
            bool: True if the batch system is available, False otherwise.
        """
        raise NotImplementedError(
            "isAvailable method is not implemented for this batch system implementation"
        )

    @staticmethod
    def jobSubmit(submission: ArraySubmission) -> str:
        """
        Submit a job array to the batch system.

        Args:
            submission (ArraySubmission): Description of the job array.

        Returns:
            str: Raw acknowledgment printed by the batch system.

        Raises:
            SubmissionExecError: If the submission command cannot be launched.
        """
        raise NotImplementedError(
            "jobSubmit method is not implemented for this batch system implementation"
        )

    @staticmethod
    def queryStatus(job_id: str) -> str:
        """
        Query the state of all tasks of a job array.

        Args:
            job_id (str): Identifier of the job array.

        Returns:
            str: One line per task containing the task name, its status code,
            and its exit code, separated by whitespace.

        Raises:
            StatusQueryError: If the status command cannot be launched.
        """
        raise NotImplementedError(
            "queryStatus method is not implemented for this batch system implementation"
        )
