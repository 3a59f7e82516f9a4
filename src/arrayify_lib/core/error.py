# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Exception types used throughout arrayify.

Every exception derives from `ArrayifyError` and carries the exit code used
by arrayify commands to report failures consistently. None of them is retried:
a failed submission has to be re-run from scratch.
"""

from .config import CFG


class ArrayifyError(Exception):
    """Common exception type for all recoverable arrayify errors."""

    exit_code = CFG.exit_codes.default


class InputNotFoundError(ArrayifyError):
    """Raised when the input file or directory does not exist."""

    pass


class MalformedInputError(ArrayifyError):
    """Raised when the input cannot be parsed into job commands."""

    pass


class IncompletePairError(ArrayifyError):
    """Raised when an identifier in a paired directory lacks one of its files."""

    def __init__(self, identifier: str):
        super().__init__(f"Missing first or second file of the pair for ID '{identifier}'.")
        self.identifier = identifier


class EmptyInputError(ArrayifyError):
    """Raised when the input yields no jobs at all."""

    pass


class SubmissionExecError(ArrayifyError):
    """
    Raised when the dispatch log cannot be written
    or the submission command cannot be launched.
    """

    pass


class StatusQueryError(ArrayifyError):
    """Raised when the status query command cannot be launched."""

    pass
