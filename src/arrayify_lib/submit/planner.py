# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import math
from fractions import Fraction

from arrayify_lib.core.config import CFG
from arrayify_lib.core.logger import get_logger

logger = get_logger(__name__)


def compute_batch_size(job_count: int, override: int | None = None) -> int:
    """
    Compute the maximal number of concurrently running tasks of a job array.

    Args:
        job_count (int): Number of tasks in the array.
        override (int | None): Batch size requested by the user. Returned unchanged if set.

    Returns:
        int: The requested batch size, or a fraction of the array
        (20% by default) rounded up and clamped to [1, job_count].
    """
    if override is not None:
        if override > job_count:
            logger.warning(
                f"Batch size {override} exceeds the number of jobs ({job_count})."
            )
        return override

    # exact arithmetic: 15 * 0.2 must give 3, not 3.0000000000000004
    fraction = Fraction(str(CFG.submit_defaults.batch_fraction))
    calculated = math.ceil(job_count * fraction)
    return max(1, min(calculated, job_count))
