# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from arrayify_lib.core.common import get_panel_width
from arrayify_lib.core.config import CFG
from arrayify_lib.properties.status import StatusReport, TaskState


class StatusPresenter:
    """
    Presents the state of the tasks of a job array.
    """

    def __init__(self, job_id: str, report: StatusReport):
        self._job_id = job_id
        self._report = report

    def createStatusPanel(self, console: Console | None = None) -> Group:
        """
        Create a Rich panel summarizing the state of the job array.

        Args:
            console (Console | None): Optional Rich Console instance.
                If None, a new Console will be created.

        Returns:
            Group: Rich Group containing the status panel.
        """
        console = console or Console()

        panel = Panel(
            self._createSummary(),
            title=Text(
                f"JOB ARRAY {self._job_id}",
                style=CFG.status_presenter.title_style,
                justify="center",
            ),
            border_style=CFG.status_presenter.border_style,
            padding=(1, 1),
            width=get_panel_width(
                console,
                1,
                CFG.status_presenter.min_width,
                CFG.status_presenter.max_width,
            ),
            expand=False,
        )

        return Group(Text(""), panel, Text(""))

    def _createSummary(self) -> Text:
        """
        Build the text listing task counts and failures.
        """
        report = self._report
        text = Text()

        if report.success:
            text.append(
                f"All {report.done_count} tasks completed successfully.",
                style=TaskState.DONE.color,
            )
            return text

        if report.total_count == 0:
            text.append("No tasks found.", style=TaskState.OTHER.color)
            return text

        for count, label, state in (
            (report.running_count, "running", TaskState.RUN),
            (report.pending_count, "pending", TaskState.PEND),
            (report.done_count, "completed successfully", TaskState.DONE),
            (report.other_count, "in another state", TaskState.OTHER),
        ):
            if count > 0:
                text.append(f"{count}", style=CFG.status_presenter.count_style)
                text.append(f" tasks {label}\n", style=state.color)

        if report.failures:
            text.append(f"{len(report.failures)}", style=CFG.status_presenter.count_style)
            text.append(" tasks failed:\n", style=TaskState.EXIT.color)
            for failure in report.failures:
                text.append(f"  - {failure.task_name} exit code {failure.exit_code}: ")
                text.append(
                    f"{failure.reason}\n", style=CFG.status_presenter.reason_style
                )

        text.rstrip()
        return text
