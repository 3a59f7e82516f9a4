# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


from arrayify_lib.batch.interface import BatchInterface, BatchMeta
from arrayify_lib.core.error import StatusQueryError, SubmissionExecError
from arrayify_lib.properties.submission import ArraySubmission

from .system import VBSError, VirtualBatchSystem


class VBS(BatchInterface, metaclass=BatchMeta):
    """
    Implementation of BatchInterface for the Virtual Batch System.

    Replies are formatted like those of LSF.
    """

    _batch_system = VirtualBatchSystem()

    def envName() -> str:
        return "VBS"

    def isAvailable() -> bool:
        # always available
        return True

    def jobSubmit(submission: ArraySubmission) -> str:
        try:
            job_id = VBS._batch_system.submitArray(submission)
        except VBSError as e:
            raise SubmissionExecError(f"Failed to submit job array: {e}") from e

        return f"Job <{job_id}> is submitted to queue <{submission.queue}>.\n"

    def queryStatus(job_id: str) -> str:
        try:
            lines = VBS._batch_system.statusLines(job_id)
        except VBSError as e:
            raise StatusQueryError(f"Failed to query job '{job_id}': {e}") from e

        return "".join(f"{line}\n" for line in lines)


# register VBS
BatchMeta.register(VBS)
