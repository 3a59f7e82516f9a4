# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Virtual batch system used for testing arrayify without LSF.

Importing this module registers the `VBS` backend.
"""

from .system import VBSError, VirtualArray, VirtualBatchSystem, VirtualTask
from .vbs import VBS

__all__ = ["VBS", "VBSError", "VirtualArray", "VirtualBatchSystem", "VirtualTask"]
