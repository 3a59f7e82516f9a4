# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from unittest.mock import MagicMock, patch

import pytest

from arrayify_lib.check.aggregator import aggregate, parse_status_lines
from arrayify_lib.core.error import StatusQueryError
from arrayify_lib.properties.status import TaskFailure


def test_parse_status_lines_mixed_states():
    report = parse_status_lines(["taskA RUN -", "taskB DONE 0", "taskC EXIT 143"])

    assert report.running_count == 1
    assert report.done_count == 1
    assert report.pending_count == 0
    assert report.other_count == 0
    assert report.failures == [TaskFailure("taskC", "143", "Timeout")]
    assert report.total_count == 3
    assert not report.success


def test_parse_status_lines_all_done():
    report = parse_status_lines([f"arr[{i}] DONE 0" for i in range(1, 6)])

    assert report.done_count == 5
    assert report.success


def test_parse_status_lines_pending_and_other():
    report = parse_status_lines(
        ["arr[1] PEND -", "arr[2] PSUSP -", "arr[3] UNKWN -", "arr[4] PEND -"]
    )

    assert report.pending_count == 2
    assert report.other_count == 2
    assert not report.success


def test_parse_status_lines_ignores_short_lines():
    report = parse_status_lines(["", "   ", "arr[1] DONE", "arr[2] DONE 0"])

    assert report.total_count == 1
    assert report.success


def test_parse_status_lines_tolerates_extra_whitespace_and_fields():
    report = parse_status_lines(["  arr[1]\tEXIT   137  extra  "])

    assert report.failures == [TaskFailure("arr[1]", "137", "Killed (OOM)")]


def test_parse_status_lines_unknown_exit_code():
    report = parse_status_lines(["arr[1] EXIT 1"])

    assert report.failures[0].reason == "Unknown error"


def test_parse_status_lines_keeps_failure_order():
    report = parse_status_lines(["b EXIT 2", "a EXIT 130"])

    assert [failure.task_name for failure in report.failures] == ["b", "a"]
    assert [failure.reason for failure in report.failures] == [
        "Killed",
        "Memory error",
    ]


def test_parse_status_lines_empty():
    report = parse_status_lines([])

    assert report.total_count == 0
    assert not report.success


def test_aggregate_queries_batch_system():
    batch_system = MagicMock()
    batch_system.queryStatus.return_value = "arr[1] DONE 0\narr[2] RUN -\n"

    report = aggregate("123", batch_system)

    batch_system.queryStatus.assert_called_once_with("123")
    assert report.done_count == 1
    assert report.running_count == 1


def test_aggregate_is_a_fresh_snapshot():
    batch_system = MagicMock()
    batch_system.queryStatus.side_effect = ["arr[1] RUN -\n", "arr[1] DONE 0\n"]

    assert aggregate("123", batch_system).running_count == 1
    assert aggregate("123", batch_system).success


def test_aggregate_no_tasks_warns():
    batch_system = MagicMock()
    batch_system.queryStatus.return_value = ""

    with patch("arrayify_lib.check.aggregator.logger") as mock_logger:
        report = aggregate("123", batch_system)

    assert report.total_count == 0
    mock_logger.warning.assert_called_once()


def test_aggregate_propagates_query_error():
    batch_system = MagicMock()
    batch_system.queryStatus.side_effect = StatusQueryError("cannot launch")

    with pytest.raises(StatusQueryError):
        aggregate("123", batch_system)
