# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Utilities for submitting arrayify job arrays.

`compute_batch_size` derives how many tasks of the array may run at the same
time. `Submitter` writes the dispatch log, renders the per-task wrapper script,
submits the job array through a batch system, and recovers the job ID from its
reply. `SubmitterFactory` turns the options of `arrayify sub` into a resolved
list of jobs and a fully configured `Submitter`.
"""

from .cli import sub
from .factory import SubmitterFactory
from .planner import compute_batch_size
from .submitter import Submitter, parse_job_id

__all__ = [
    "SubmitterFactory",
    "Submitter",
    "compute_batch_size",
    "parse_job_id",
    "sub",
]
