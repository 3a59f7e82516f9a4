# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from dataclasses import dataclass, field
from enum import Enum
from typing import Self

from arrayify_lib.core.config import CFG


class TaskState(Enum):
    """
    State of an array task as reported by LSF.
    """

    DONE = 1
    RUN = 2
    PEND = 3
    EXIT = 4
    OTHER = 5

    def __str__(self) -> str:
        """
        Return the lowercase string representation of the enum variant.

        Returns:
            str: The name of the state in lowercase.
        """
        return self.name.lower()

    @classmethod
    def fromCode(cls, code: str) -> Self:
        """
        Convert an LSF status code to the corresponding TaskState.

        Args:
            code (str): Status code as printed by bjobs (e.g. 'RUN').

        Returns:
            TaskState: Corresponding enum variant. Returns OTHER for codes
            without a dedicated variant (e.g. 'PSUSP', 'UNKWN').
        """
        try:
            state = cls[code]
        except KeyError:
            return cls.OTHER

        return cls.OTHER if state == cls.OTHER else state

    @property
    def color(self) -> str:
        """
        Return the display color associated with this TaskState.

        Returns:
            str: A string representing the color for presentation purposes.
        """
        return {
            self.DONE: CFG.state_colors.done,
            self.RUN: CFG.state_colors.running,
            self.PEND: CFG.state_colors.pending,
            self.EXIT: CFG.state_colors.failed,
            self.OTHER: CFG.state_colors.other,
        }[self]


# known exit codes of failed tasks
_EXIT_REASONS = {
    "2": "Killed",
    "130": "Memory error",
    "137": "Killed (OOM)",
    "143": "Timeout",
}


def exit_reason(exit_code: str) -> str:
    """
    Translate the exit code of a failed task into a human-readable reason.

    Args:
        exit_code (str): Exit code as printed by bjobs.

    Returns:
        str: Reason of the failure, 'Unknown error' for unrecognized codes.
    """
    return _EXIT_REASONS.get(exit_code, "Unknown error")


@dataclass(frozen=True)
class TaskFailure:
    """A task of the array which exited with an error."""

    task_name: str
    exit_code: str
    reason: str


@dataclass
class StatusReport:
    """
    Point-in-time summary of the tasks of a job array.
    """

    done_count: int = 0
    running_count: int = 0
    pending_count: int = 0
    # tasks in states without a dedicated bucket (suspended, unknown, ...)
    other_count: int = 0
    failures: list[TaskFailure] = field(default_factory=list)

    @property
    def total_count(self) -> int:
        """Number of tasks accounted for in the report."""
        return (
            self.done_count
            + self.running_count
            + self.pending_count
            + self.other_count
            + len(self.failures)
        )

    @property
    def success(self) -> bool:
        """
        Whether the whole array completed successfully.

        True only if at least one task was reported and every reported task is done.
        """
        return self.total_count > 0 and self.done_count == self.total_count
