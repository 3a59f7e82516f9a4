# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class TabularFile:
    """A delimited file with a header row and one data row per job."""

    path: Path
    # field delimiter; derived from the file suffix if not set
    delimiter: str | None = None


@dataclass(frozen=True)
class PairedDirectory:
    """A flat directory of `<ID>_1*` / `<ID>_2*` file pairs, one pair per job."""

    path: Path


InputSource = TabularFile | PairedDirectory
