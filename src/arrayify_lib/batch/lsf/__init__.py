# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
LSF backend for arrayify: job array submission through `bsub`
and task-state queries through `bjobs`.
"""

from .lsf import LSF

__all__ = ["LSF"]
