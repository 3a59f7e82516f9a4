# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import csv
from collections.abc import Iterable
from pathlib import Path

from arrayify_lib.core.config import CFG
from arrayify_lib.core.error import (
    EmptyInputError,
    IncompletePairError,
    InputNotFoundError,
    MalformedInputError,
)
from arrayify_lib.core.logger import get_logger
from arrayify_lib.properties.input_source import (
    InputSource,
    PairedDirectory,
    TabularFile,
)
from arrayify_lib.properties.job_spec import JobSpec

logger = get_logger(__name__)


def expand(template: str, mapping: Iterable[tuple[str, str]]) -> str:
    """
    Replace `{KEY}` placeholders in a command template.

    Every key is replaced literally and independently, in the order provided.
    Placeholders without a matching key are left untouched.

    Args:
        template (str): Command template, e.g. 'echo {ID} {R1}'.
        mapping (Iterable[tuple[str, str]]): Pairs of placeholder name and value.

    Returns:
        str: The expanded command.
    """
    command = template
    for key, value in mapping:
        command = command.replace(f"{{{key}}}", value)

    return command


def resolve(source: InputSource, template: str) -> list[JobSpec]:
    """
    Resolve an input source into an ordered list of jobs.

    Args:
        source (InputSource): Tabular file or paired directory.
        template (str): Command template with `{NAME}` placeholders.

    Returns:
        list[JobSpec]: Jobs indexed from 1. May be empty for a tabular file without rows.

    Raises:
        InputNotFoundError: If the input does not exist.
        MalformedInputError: If the input cannot be parsed.
        IncompletePairError: If a paired directory contains an incomplete pair.
        EmptyInputError: If a paired directory contains no complete pair.
    """
    match source:
        case TabularFile(path=path, delimiter=delimiter):
            return read_tabular(path, template, delimiter)
        case PairedDirectory(path=path):
            return read_paired_directory(path, template)
        case _:
            raise TypeError(f"Unsupported input source '{source}'.")


def read_tabular(
    path: Path, template: str, delimiter: str | None = None
) -> list[JobSpec]:
    """
    Expand the command template once per data row of a delimited file.

    The header row defines the placeholder names.

    Args:
        path (Path): Path to the delimited file.
        template (str): Command template.
        delimiter (str | None): Field delimiter. If None, it is derived from the file suffix.

    Returns:
        list[JobSpec]: One job per data row.

    Raises:
        InputNotFoundError: If the file does not exist.
        MalformedInputError: If a row cannot be read or its length does not match the header.
    """
    if not path.is_file():
        raise InputNotFoundError(f"Input file '{path}' does not exist or is not a file.")

    delimiter = delimiter or _guess_delimiter(path)
    logger.debug(f"Reading '{path}' with delimiter '{delimiter!r}'.")

    commands = []
    try:
        with path.open("r", encoding="utf-8-sig", newline="") as handle:
            reader = csv.reader(handle, delimiter=delimiter, strict=True)
            header = None
            for row in reader:
                # blank lines carry no job
                if not row:
                    continue

                if header is None:
                    header = row
                    continue

                if len(row) != len(header):
                    raise MalformedInputError(
                        f"Row on line {reader.line_num} of '{path}' has {len(row)} fields, expected {len(header)}."
                    )

                commands.append(expand(template, zip(header, row)))
    except (csv.Error, UnicodeDecodeError) as e:
        raise MalformedInputError(f"Could not parse '{path}': {e}.") from e
    except OSError as e:
        raise MalformedInputError(f"Could not read '{path}': {e}.") from e

    return _to_jobs(commands, path)


def read_paired_directory(path: Path, template: str) -> list[JobSpec]:
    """
    Expand the command template once per pair of files in a directory.

    A file whose name contains the first-pair marker ('_1') is the first file of a pair,
    otherwise a file whose name contains the second-pair marker ('_2') is the second one.
    The pair ID is the part of the name preceding the marker.
    Only the `{ID}`, `{R1}`, and `{R2}` placeholders are expanded.

    Jobs are ordered by pair ID.

    Args:
        path (Path): Path to the directory.
        template (str): Command template.

    Returns:
        list[JobSpec]: One job per pair.

    Raises:
        InputNotFoundError: If the directory does not exist.
        IncompletePairError: If any ID lacks one of its files.
        EmptyInputError: If the directory contains no pair.
    """
    if not path.is_dir():
        raise InputNotFoundError(
            f"Input directory '{path}' does not exist or is not a directory."
        )

    first_marker = CFG.paired.first_marker
    second_marker = CFG.paired.second_marker

    pairs: dict[str, list[Path | None]] = {}
    for file in sorted(path.iterdir()):
        if not file.is_file():
            continue

        if first_marker in file.name:
            identifier, slot = file.name.split(first_marker, 1)[0], 0
        elif second_marker in file.name:
            identifier, slot = file.name.split(second_marker, 1)[0], 1
        else:
            logger.debug(f"Ignoring unpaired file '{file.name}'.")
            continue

        pair = pairs.setdefault(identifier, [None, None])
        if pair[slot] is not None:
            logger.warning(
                f"Ignoring '{file.name}': ID '{identifier}' already uses '{pair[slot].name}'."
            )
            continue
        # links are kept so that tools see the listed file names
        pair[slot] = file.absolute()

    commands = []
    for identifier in sorted(pairs):
        first, second = pairs[identifier]
        if first is None or second is None:
            raise IncompletePairError(identifier)

        commands.append(
            expand(
                template,
                [("ID", identifier), ("R1", str(first)), ("R2", str(second))],
            )
        )

    if not commands:
        raise EmptyInputError(f"No valid file pairs found in directory '{path}'.")

    return _to_jobs(commands, path)


def _guess_delimiter(path: Path) -> str:
    """
    Derive the field delimiter of a tabular file from its suffix.
    """
    if path.suffix.lower() in CFG.tabular.tsv_suffixes:
        return "\t"

    return CFG.tabular.delimiter


def _to_jobs(commands: list[str], source: Path) -> list[JobSpec]:
    """
    Index the commands, rejecting those which would not fit on a single log line.
    """
    for i, command in enumerate(commands, start=1):
        if "\n" in command or "\r" in command:
            raise MalformedInputError(
                f"Command of job {i} resolved from '{source}' spans multiple lines."
            )

    logger.debug(f"Resolved {len(commands)} jobs from '{source}'.")
    return JobSpec.enumerate(commands)
