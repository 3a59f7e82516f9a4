# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Configuration system for arrayify.

This module defines dataclasses representing all configurable aspects of arrayify,
including environment variables, submission defaults, input parsing options,
LSF command settings, presentation settings, and exit codes.

The `Config` class loads user configuration from a TOML file (if available)
and provides a globally accessible `CFG` instance.
"""

import os
import tomllib
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Self


@dataclass
class EnvironmentVariables:
    """Environment variable names used by arrayify."""

    # Enables arrayify debug mode.
    debug_mode: str = "ARRAYIFY_DEBUG"
    # Name of the batch system to use.
    batch_system: str = "ARRAYIFY_BATCH_SYSTEM"
    # Path to an explicit configuration file.
    config: str = "ARRAYIFY_CONFIG"
    # Index of the array task, set by LSF for every task of a job array.
    task_index: str = "LSB_JOBINDEX"


@dataclass
class SubmitDefaults:
    """Default values of the submission options."""

    # Prefix of the job array name.
    job_prefix: str = "arrayify"
    # Directory for the dispatch log and the task output.
    log_dir: str = "logs"
    # Memory per task in GB.
    memory_gb: int = 1
    # Number of threads per task.
    threads: int = 1
    # Queue to submit to.
    queue: str = "normal"
    # Fraction of the array allowed to run concurrently if no batch size is given.
    batch_fraction: float = 0.2


@dataclass
class TabularSettings:
    """Settings for reading tabular input files."""

    # Field delimiter used when it cannot be derived from the file suffix.
    delimiter: str = ","
    # File suffixes which imply tab-separated values.
    tsv_suffixes: list[str] = field(default_factory=lambda: [".tsv", ".tab"])


@dataclass
class PairedSettings:
    """Settings for reading directories of paired files."""

    # Marker identifying the first file of a pair.
    first_marker: str = "_1"
    # Marker identifying the second file of a pair.
    second_marker: str = "_2"


@dataclass
class LSFOptions:
    """Options associated with LSF."""

    # Command used to submit jobs.
    submit_binary: str = "bsub"
    # Command used to query job status.
    status_binary: str = "bjobs"
    # Suffix appended to the job prefix to form the job array name.
    array_suffix: str = "_job_array"
    # Factor converting GB into the memory unit used by LSF.
    memory_factor: int = 1000
    # Pattern extracting the job ID from the reply of bsub.
    job_id_pattern: str = r"Job <(\d+)>"
    # Name pattern of the task stdout files (%J = job ID, %I = task index).
    stdout_pattern: str = "job_%J_%I.out"
    # Name pattern of the task stderr files.
    stderr_pattern: str = "job_%J_%I.err"
    # Fields requested from bjobs, in this order.
    status_fields: str = "job_name stat exit_code"


@dataclass
class StatusPresenterSettings:
    """Settings for StatusPresenter."""

    # Maximal width of the status panel.
    max_width: int | None = None
    # Minimal width of the status panel.
    min_width: int | None = 60
    # Style of the border lines.
    border_style: str = "white"
    # Style of the title.
    title_style: str = "white bold"
    # Style used for task counts.
    count_style: str = "default bold"
    # Style used for failure reasons.
    reason_style: str = "grey70"


@dataclass
class DateFormats:
    """Date and time format strings."""

    # Standard date format used by arrayify.
    standard: str = "%Y-%m-%d %H:%M:%S"
    # Date format used in the names of dispatch logs.
    log_timestamp: str = "%Y-%m-%d-%H-%M-%S"


@dataclass
class ExitCodes:
    """Exit codes used for various errors."""

    # Default error code for failures of arrayify commands.
    default: int = 91
    # Returned on an unexpected or unhandled error.
    unexpected_error: int = 99


@dataclass
class StateColors:
    """Color scheme for task states."""

    # Style used for finished tasks.
    done: str = "bright_green"
    # Style used for running tasks.
    running: str = "bright_blue"
    # Style used for pending tasks.
    pending: str = "bright_magenta"
    # Style used for failed tasks.
    failed: str = "bright_red"
    # Style used for tasks in any other state.
    other: str = "grey70"


@dataclass
class Config:
    """Main configuration for arrayify."""

    env_vars: EnvironmentVariables = field(default_factory=EnvironmentVariables)
    submit_defaults: SubmitDefaults = field(default_factory=SubmitDefaults)
    tabular: TabularSettings = field(default_factory=TabularSettings)
    paired: PairedSettings = field(default_factory=PairedSettings)
    lsf: LSFOptions = field(default_factory=LSFOptions)
    status_presenter: StatusPresenterSettings = field(
        default_factory=StatusPresenterSettings
    )
    date_formats: DateFormats = field(default_factory=DateFormats)
    exit_codes: ExitCodes = field(default_factory=ExitCodes)
    state_colors: StateColors = field(default_factory=StateColors)

    # Name of the arrayify binary.
    binary_name: str = "arrayify"
    # Prefix of the dispatch log file names.
    log_prefix: str = "arrayify"

    @classmethod
    def load(cls, config_path: Path | None = None) -> Self:
        """
        Load configuration from TOML file or use defaults.

        Args:
            config_path: Explicit path to config file. If None, searches standard locations.

        Returns:
            Config instance with loaded or default values.
        """
        if config_path is None:
            config_path = Config._get_config_path()

        try:
            if config_path and config_path.exists():
                with config_path.open("rb") as f:
                    config_data = tomllib.load(f)
                return _dict_to_dataclass(cls, config_data)
        except Exception as e:
            raise ValueError(f"Could not read arrayify config '{config_path}': {e}.")

        # no config found - use defaults
        return cls()

    @staticmethod
    def _get_config_path() -> Path | None:
        """
        Search for config file in standard locations (XDG compliant).
        Returns the first existing config file, or None.
        """
        config_locations: list[Path | None] = [
            # 1. Explicit environment variable (highest priority)
            Path(env_path) if (env_path := os.getenv("ARRAYIFY_CONFIG")) else None,
            # 2. Current working directory
            Path.cwd() / "arrayify_config.toml",
            # 3. XDG config home
            Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
            / "arrayify"
            / "config.toml",
        ]

        for path in config_locations:
            if path and path.is_file():
                return path

        return None


def _dict_to_dataclass(cls, data: dict[str, Any]):
    """
    Recursively convert a dictionary to a dataclass instance.
    Handles nested dataclasses properly.
    """
    if not is_dataclass(cls):
        return data

    field_values = {}
    for field_info in fields(cls):
        field_name = field_info.name
        field_type = field_info.type

        if field_name in data:
            value = data[field_name]
            if is_dataclass(field_type) and isinstance(value, dict):
                field_values[field_name] = _dict_to_dataclass(field_type, value)
            else:
                field_values[field_name] = value

    return cls(**field_values)


# Global configuration for arrayify.
CFG = Config.load()
