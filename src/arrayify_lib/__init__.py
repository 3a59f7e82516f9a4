# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core implementation of the arrayify command-line tool.

arrayify turns a CSV file or a directory of paired files into a single LSF
job array: every row or pair becomes one task running a command expanded from
a template. The package resolves the inputs into commands, sizes the number of
concurrently running tasks, writes the dispatch log read by the tasks, submits
the array, and summarizes the state of its tasks on request.
"""

from .arrayify import __version__, cli

__all__ = [
    "__version__",
    "cli",
    "batch",
    "check",
    "core",
    "properties",
    "resolve",
    "submit",
]
