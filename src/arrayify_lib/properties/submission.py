# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SubmissionPlan:
    """
    Settings of a single job array submission.

    All fields are resolved before submission starts.
    """

    # prefix of the job array name
    job_prefix: str
    # directory for the dispatch log and the task output
    log_dir: Path
    # memory per task in GB
    memory_gb: int
    # number of threads per task
    threads: int
    # name of the queue to submit to
    queue: str
    # maximal number of concurrently running tasks
    batch_size: int


@dataclass(frozen=True)
class ArraySubmission:
    """
    Everything a batch system needs to submit a job array.

    Memory is already converted to the unit of the batch system.
    """

    name: str
    size: int
    batch_size: int
    queue: str
    threads: int
    memory: int
    stdout: str
    stderr: str
    script: str


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of a successful submission."""

    # ID of the submitted job array, or 'unknown' if it could not be parsed
    job_id: str
    # path to the dispatch log
    log_file: Path
    # number of tasks in the array
    job_count: int
