# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import os
import subprocess
from dataclasses import dataclass, field

from arrayify_lib.core.config import CFG
from arrayify_lib.properties.status import TaskState
from arrayify_lib.properties.submission import ArraySubmission


class VBSError(Exception):
    """Common exception type for Virtual Batch System errors."""

    pass


@dataclass
class VirtualTask:
    index: int
    state: TaskState = TaskState.PEND
    exit_code: int | None = None
    output: str = ""


@dataclass
class VirtualArray:
    job_id: str
    submission: ArraySubmission
    tasks: list[VirtualTask] = field(default_factory=list)

    def taskName(self, task: VirtualTask) -> str:
        return f"{self.submission.name}[{task.index}]"


class VirtualBatchSystem:
    """
    A virtual batch system for testing purposes.
    Job arrays are stored in a dictionary and their tasks are only executed on request,
    synchronously, in the current environment.
    """

    # first job ID handed out, so that IDs look like real LSF IDs
    FIRST_JOB_ID = 1000

    def __init__(self):
        """Initialize the Virtual Batch System instance."""
        self.arrays: dict[str, VirtualArray] = {}

    def clearJobs(self):
        """Remove all job arrays from the batch system."""
        self.arrays.clear()

    def submitArray(self, submission: ArraySubmission) -> str:
        """Register a new job array with all its tasks pending."""
        if submission.size < 1:
            raise VBSError("Job array must contain at least one task.")

        job_id = str(self.FIRST_JOB_ID + len(self.arrays))
        self.arrays[job_id] = VirtualArray(
            job_id=job_id,
            submission=submission,
            tasks=[VirtualTask(i) for i in range(1, submission.size + 1)],
        )

        return job_id

    def runTask(self, job_id: str, index: int):
        """Execute the wrapper script of the selected task and record its result."""
        task = self._getTask(job_id, index)
        script = self.arrays[job_id].submission.script

        task.state = TaskState.RUN
        result = subprocess.run(
            ["bash", "-c", script],
            env=os.environ | {CFG.env_vars.task_index: str(index)},
            capture_output=True,
            text=True,
            check=False,
        )
        task.output = result.stdout
        task.exit_code = result.returncode
        task.state = TaskState.DONE if result.returncode == 0 else TaskState.EXIT

    def setTaskState(
        self, job_id: str, index: int, state: TaskState, exit_code: int | None = None
    ):
        """Force the state of the selected task."""
        task = self._getTask(job_id, index)
        task.state = state
        task.exit_code = exit_code

    def statusLines(self, job_id: str) -> list[str]:
        """Return bjobs-like status lines for all tasks of a job array."""
        array = self.arrays.get(job_id)
        if not array:
            raise VBSError(f"Job '{job_id}' does not exist.")

        lines = []
        for task in array.tasks:
            exit_code = "-" if task.exit_code is None else str(task.exit_code)
            lines.append(
                f"{array.taskName(task)} {task.state.name} {exit_code}"
            )

        return lines

    def _getTask(self, job_id: str, index: int) -> VirtualTask:
        array = self.arrays.get(job_id)
        if not array:
            raise VBSError(f"Job '{job_id}' does not exist.")

        if not 1 <= index <= len(array.tasks):
            raise VBSError(f"Job '{job_id}' has no task with index {index}.")

        return array.tasks[index - 1]
