"""Progress display for long running searches."""

from __future__ import annotations

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)

from runaiops.cli.common.output import err_console

_MAX_JOB_NAME_WIDTH = 48


def _truncate(text: str, max_len: int) -> str:
    """Return text capped at max_len characters using an ASCII ellipsis."""
    if max_len <= 3 or len(text) <= max_len:
        return text[:max_len]
    return f"{text[: max_len - 3]}..."


class SearchProgressDisplay:
    """
    Rich progress bar for a search, rendered on stderr.

    Shows x/y candidates inspected, the number of matches so far and the
    last inspected job. Implements the SearchProgress observer protocol
    of runaiops.core.search; use it as a context manager around the
    consumption of the search results.
    """

    def __init__(self, console: Console | None = None):
        self.matches = 0
        self._task_id: TaskID | None = None
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold]Inspecting logs[/]"),
            BarColumn(),
            TaskProgressColumn(),
            TextColumn("matches=[bold green]{task.fields[matches]}[/]"),
            TextColumn("[dim]{task.fields[job]}[/]"),
            TimeElapsedColumn(),
            console=console or err_console,
            transient=True,
        )

    def __enter__(self) -> SearchProgressDisplay:
        self._progress.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self._progress.stop()

    def started(self, total: int) -> None:
        """Create the progress task once the candidate count is known."""
        self._task_id = self._progress.add_task(
            "search",
            total=max(total, 1),
            matches=0,
            job="",
        )
        if total == 0:
            self._progress.update(self._task_id, completed=1)

    def advance(self, job_name: str, matched: bool) -> None:
        """Record one inspected candidate."""
        if self._task_id is None:
            return
        if matched:
            self.matches += 1
        self._progress.update(
            self._task_id,
            advance=1,
            matches=self.matches,
            job=_truncate(job_name, _MAX_JOB_NAME_WIDTH),
        )
