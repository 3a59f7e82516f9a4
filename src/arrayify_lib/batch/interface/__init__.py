# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Abstractions for integrating arrayify with batch scheduling systems.

- `BatchInterface`: the narrow interface every backend implements. It submits
  a job array and queries the state of its tasks, returning the raw text of
  the scheduler in both cases.

- `BatchMeta`: a metaclass that registers available backends and selects one
  by name, from an environment variable, or by probing availability.
"""

from .interface import BatchInterface
from .meta import BatchMeta

__all__ = ["BatchInterface", "BatchMeta"]
