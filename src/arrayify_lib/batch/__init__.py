# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Batch-system support for arrayify.

This module groups the abstract batch-system interface and the concrete
backends. The virtual batch system is not imported here; it is only
registered when imported explicitly.
"""

# import so that these batch systems are available but do not export them from here
from .lsf import LSF as _LSF

_LSF
