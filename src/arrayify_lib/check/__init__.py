# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Utilities for checking the state of submitted job arrays.

`aggregate` queries the batch system once and sorts the reported tasks into
done, running, pending, and failed buckets, translating the exit codes of
failed tasks into readable reasons. `StatusPresenter` renders the resulting
`StatusReport` as a Rich panel.
"""

from .aggregator import aggregate, parse_status_lines
from .cli import check
from .presenter import StatusPresenter

__all__ = ["StatusPresenter", "aggregate", "check", "parse_status_lines"]
