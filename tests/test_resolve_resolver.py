# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from pathlib import Path
from unittest.mock import patch

import pytest

from arrayify_lib.core.error import (
    EmptyInputError,
    IncompletePairError,
    InputNotFoundError,
    MalformedInputError,
)
from arrayify_lib.properties.input_source import PairedDirectory, TabularFile
from arrayify_lib.properties.job_spec import JobSpec
from arrayify_lib.resolve.resolver import (
    _guess_delimiter,
    expand,
    read_paired_directory,
    read_tabular,
    resolve,
)


def test_expand_replaces_all_occurrences():
    assert expand("{a}-{a}-{b}", [("a", "x"), ("b", "y")]) == "x-x-y"


def test_expand_leaves_unknown_placeholders():
    assert expand("run {a} {missing}", [("a", "x")]) == "run x {missing}"


def test_expand_ignores_unused_keys():
    assert expand("run {a}", [("a", "x"), ("b", "y")]) == "run x"


def test_expand_is_literal():
    assert expand("echo {a.b} {a}", [("a.b", "1"), ("a", "2")]) == "echo 1 2"


def test_expand_substring_names_are_not_disambiguated():
    # '{ab}' is not affected by the key 'a'
    assert expand("{a} {ab}", [("a", "1"), ("ab", "2")]) == "1 2"


def test_read_tabular_single_row(tmp_path):
    csv_file = tmp_path / "jobs.csv"
    csv_file.write_text("a,b\nx,y\n")

    jobs = read_tabular(csv_file, "run {a} {b}")

    assert jobs == [JobSpec(1, "run x y")]


def test_read_tabular_is_idempotent(tmp_path):
    csv_file = tmp_path / "jobs.csv"
    csv_file.write_text("a,b\nx,y\nz,w\n")

    assert read_tabular(csv_file, "run {a} {b}") == read_tabular(
        csv_file, "run {a} {b}"
    )


def test_read_tabular_multiple_rows_in_order(tmp_path):
    csv_file = tmp_path / "jobs.csv"
    csv_file.write_text("header1,header2\nvalue1,value2\nvalue3,value4\n")

    jobs = read_tabular(csv_file, "echo {header1} {header2}")

    assert [job.command for job in jobs] == ["echo value1 value2", "echo value3 value4"]
    assert [job.index for job in jobs] == [1, 2]


def test_read_tabular_ignores_unused_columns_and_keeps_unknown_placeholders(tmp_path):
    csv_file = tmp_path / "jobs.csv"
    csv_file.write_text("a,unused\nx,y\n")

    jobs = read_tabular(csv_file, "run {a} {b}")

    assert jobs[0].command == "run x {b}"


def test_read_tabular_quoted_values(tmp_path):
    csv_file = tmp_path / "jobs.csv"
    csv_file.write_text('name,args\nsample,"--a 1,2 --b"\n')

    jobs = read_tabular(csv_file, "tool {name} {args}")

    assert jobs[0].command == "tool sample --a 1,2 --b"


def test_read_tabular_skips_blank_lines(tmp_path):
    csv_file = tmp_path / "jobs.csv"
    csv_file.write_text("a\n\nx\n\ny\n")

    jobs = read_tabular(csv_file, "echo {a}")

    assert [job.command for job in jobs] == ["echo x", "echo y"]


def test_read_tabular_strips_bom(tmp_path):
    csv_file = tmp_path / "jobs.csv"
    csv_file.write_bytes("\ufeffa\nx\n".encode())

    assert read_tabular(csv_file, "echo {a}")[0].command == "echo x"


def test_read_tabular_header_only_yields_no_jobs(tmp_path):
    csv_file = tmp_path / "jobs.csv"
    csv_file.write_text("header1,header2\n")

    assert read_tabular(csv_file, "echo {header1}") == []


def test_read_tabular_empty_file_yields_no_jobs(tmp_path):
    csv_file = tmp_path / "jobs.csv"
    csv_file.write_text("")

    assert read_tabular(csv_file, "echo") == []


def test_read_tabular_tsv_suffix_uses_tabs(tmp_path):
    tsv_file = tmp_path / "jobs.tsv"
    tsv_file.write_text("a\tb\nx,1\ty\n")

    jobs = read_tabular(tsv_file, "run {a} {b}")

    assert jobs[0].command == "run x,1 y"


def test_read_tabular_explicit_delimiter(tmp_path):
    csv_file = tmp_path / "jobs.csv"
    csv_file.write_text("a;b\nx;y\n")

    jobs = read_tabular(csv_file, "run {a} {b}", delimiter=";")

    assert jobs[0].command == "run x y"


def test_read_tabular_ragged_row_raises(tmp_path):
    csv_file = tmp_path / "jobs.csv"
    csv_file.write_text("a,b\nx,y\nz\n")

    with pytest.raises(MalformedInputError, match="line 3"):
        read_tabular(csv_file, "run {a} {b}")


def test_read_tabular_bad_quoting_raises(tmp_path):
    csv_file = tmp_path / "jobs.csv"
    csv_file.write_text('a,b\n"x"y,z\n')

    with pytest.raises(MalformedInputError, match="Could not parse"):
        read_tabular(csv_file, "run {a} {b}")


def test_read_tabular_undecodable_file_raises(tmp_path):
    csv_file = tmp_path / "jobs.csv"
    csv_file.write_bytes(b"a,b\n\xff\xfe,\x80\n")

    with pytest.raises(MalformedInputError):
        read_tabular(csv_file, "run {a} {b}")


def test_read_tabular_multiline_value_raises(tmp_path):
    csv_file = tmp_path / "jobs.csv"
    csv_file.write_text('a\n"x\ny"\n')

    with pytest.raises(MalformedInputError, match="spans multiple lines"):
        read_tabular(csv_file, "echo {a}")


def test_read_tabular_missing_file_raises(tmp_path):
    with pytest.raises(InputNotFoundError, match="does not exist"):
        read_tabular(tmp_path / "missing.csv", "echo")


def test_read_tabular_directory_raises(tmp_path):
    with pytest.raises(InputNotFoundError):
        read_tabular(tmp_path, "echo")


@pytest.mark.parametrize(
    "name,expected",
    [
        ("jobs.csv", ","),
        ("jobs.tsv", "\t"),
        ("jobs.TAB", "\t"),
        ("jobs.txt", ","),
    ],
)
def test_guess_delimiter(name, expected):
    assert _guess_delimiter(Path(name)) == expected


def _touch(directory: Path, *names: str) -> None:
    for name in names:
        (directory / name).write_text("")


def test_read_paired_directory_single_pair(tmp_path):
    _touch(tmp_path, "sample_1.fq", "sample_2.fq")

    jobs = read_paired_directory(tmp_path, "echo {ID} {R1} {R2}")

    r1 = tmp_path / "sample_1.fq"
    r2 = tmp_path / "sample_2.fq"
    assert jobs == [JobSpec(1, f"echo sample {r1} {r2}")]


def test_read_paired_directory_orders_by_identifier(tmp_path):
    # created in reverse order on purpose
    _touch(tmp_path, "c_2.fq", "c_1.fq", "b_1.fq", "a_2.fq", "b_2.fq", "a_1.fq")

    jobs = read_paired_directory(tmp_path, "{ID}")

    assert [job.command for job in jobs] == ["a", "b", "c"]
    assert [job.index for job in jobs] == [1, 2, 3]


def test_read_paired_directory_ignores_other_files_and_subdirectories(tmp_path):
    _touch(tmp_path, "s_1.fq", "s_2.fq", "README.md")
    (tmp_path / "x_1").mkdir()

    jobs = read_paired_directory(tmp_path, "{ID}")

    assert [job.command for job in jobs] == ["s"]


def test_read_paired_directory_first_marker_takes_precedence(tmp_path):
    # contains both markers; classified as the first file of ID 'a'
    _touch(tmp_path, "a_1_2.fq", "a_2.fq")

    jobs = read_paired_directory(tmp_path, "{R1}|{R2}")

    r1 = tmp_path / "a_1_2.fq"
    r2 = tmp_path / "a_2.fq"
    assert jobs[0].command == f"{r1}|{r2}"


def test_read_paired_directory_duplicate_slot_keeps_first(tmp_path):
    _touch(tmp_path, "s_1.fastq", "s_1.fq", "s_2.fq")

    with patch("arrayify_lib.resolve.resolver.logger") as mock_logger:
        jobs = read_paired_directory(tmp_path, "{R1}")

    assert jobs[0].command == str(tmp_path / "s_1.fastq")
    mock_logger.warning.assert_called_once()


def test_read_paired_directory_keeps_symlinked_names(tmp_path):
    store = tmp_path / "store"
    store.mkdir()
    (store / "a1b2c3.fastq").write_text("")
    (store / "d4e5f6.fastq").write_text("")

    reads = tmp_path / "reads"
    reads.mkdir()
    (reads / "sample_1.fq").symlink_to(store / "a1b2c3.fastq")
    (reads / "sample_2.fq").symlink_to(store / "d4e5f6.fastq")

    jobs = read_paired_directory(reads, "{R1} {R2}")

    assert jobs[0].command == f"{reads / 'sample_1.fq'} {reads / 'sample_2.fq'}"
    assert "a1b2c3" not in jobs[0].command


def test_read_paired_directory_relative_path_yields_absolute_files(
    tmp_path, monkeypatch
):
    reads = tmp_path / "reads"
    reads.mkdir()
    _touch(reads, "s_1.fq", "s_2.fq")
    monkeypatch.chdir(tmp_path)

    jobs = read_paired_directory(Path("reads"), "{R1}")

    assert jobs[0].command == str(Path.cwd() / "reads" / "s_1.fq")


def test_read_paired_directory_only_expands_fixed_placeholders(tmp_path):
    _touch(tmp_path, "s_1.fq", "s_2.fq")

    jobs = read_paired_directory(tmp_path, "{ID} {OTHER}")

    assert jobs[0].command == "s {OTHER}"


def test_read_paired_directory_missing_second_raises(tmp_path):
    _touch(tmp_path, "good_1.fq", "good_2.fq", "lonely_1.fq")

    with pytest.raises(IncompletePairError) as exc_info:
        read_paired_directory(tmp_path, "{ID}")

    assert exc_info.value.identifier == "lonely"
    assert "lonely" in str(exc_info.value)


def test_read_paired_directory_missing_first_raises(tmp_path):
    _touch(tmp_path, "lonely_2.fq")

    with pytest.raises(IncompletePairError, match="lonely"):
        read_paired_directory(tmp_path, "{ID}")


def test_read_paired_directory_no_pairs_raises(tmp_path):
    _touch(tmp_path, "notes.txt", "data.csv")

    with pytest.raises(EmptyInputError):
        read_paired_directory(tmp_path, "{ID}")


def test_read_paired_directory_empty_directory_raises(tmp_path):
    with pytest.raises(EmptyInputError):
        read_paired_directory(tmp_path, "{ID}")


def test_read_paired_directory_missing_directory_raises(tmp_path):
    with pytest.raises(InputNotFoundError):
        read_paired_directory(tmp_path / "missing", "{ID}")


def test_read_paired_directory_file_instead_of_directory_raises(tmp_path):
    file = tmp_path / "file.txt"
    file.write_text("")

    with pytest.raises(InputNotFoundError, match="not a directory"):
        read_paired_directory(file, "{ID}")


def test_resolve_dispatches_tabular(tmp_path):
    csv_file = tmp_path / "jobs.csv"
    csv_file.write_text("a\nx\n")

    assert resolve(TabularFile(csv_file), "echo {a}") == [JobSpec(1, "echo x")]


def test_resolve_dispatches_tabular_with_delimiter(tmp_path):
    csv_file = tmp_path / "jobs.csv"
    csv_file.write_text("a|b\nx|y\n")

    jobs = resolve(TabularFile(csv_file, "|"), "{a}{b}")

    assert jobs == [JobSpec(1, "xy")]


def test_resolve_dispatches_paired_directory(tmp_path):
    _touch(tmp_path, "s_1.fq", "s_2.fq")

    assert resolve(PairedDirectory(tmp_path), "{ID}") == [JobSpec(1, "s")]


def test_resolve_unsupported_source_raises():
    with pytest.raises(TypeError):
        resolve("jobs.csv", "echo")
