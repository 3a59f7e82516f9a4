# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Resolution of arrayify inputs into job commands.

A tabular file contributes one job per data row, its header row naming the
placeholders of the command template. A directory of paired files contributes
one job per `<ID>_1*` / `<ID>_2*` pair, exposing the `{ID}`, `{R1}`, and `{R2}`
placeholders. Either way, the result is a list of `JobSpec` objects whose
indices become the task indices of the submitted job array.
"""

from .resolver import expand, read_paired_directory, read_tabular, resolve

__all__ = ["expand", "read_paired_directory", "read_tabular", "resolve"]
