"""Output formatting utilities for the CLI.

Two formatters are exported: `out` writes to stdout and `err` to stderr.
Commands whose stdout is meant to be piped (``find``) only print job names
on stdout and route every message, warning and evidence block to `err`.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

import questionary
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from runaiops.cli.common.tui_style import QUESTIONARY_STYLE_CONFIRM

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
        "meta": "dim",
        "match": "bold magenta",
    }
)

console = Console(theme=_THEME)
err_console = Console(theme=_THEME, stderr=True)


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and tables."""

    console: Console

    def _q(self, message: str) -> str:
        """Prefix Questionary prompts to be RUNAI-OPS consistent."""
        return f"[RUNAI-OPS] {message}"

    def info(self, msg: str) -> None:
        """Print an info message."""
        self.console.print(f"[title]›[/] {msg}", soft_wrap=True)

    @contextmanager
    def status(self, msg: str):
        """Show a transient status spinner while work is in progress."""
        with self.console.status(msg, spinner="dots"):
            yield

    def success(self, msg: str) -> None:
        """Print a success message."""
        self.console.print(f"[ok]✓[/] {msg}", soft_wrap=True)

    def warn(self, msg: str) -> None:
        """Print a warning message."""
        self.console.print(f"[warn]⚠[/] {msg}", soft_wrap=True)

    def error(self, msg: str) -> None:
        """Print an error message."""
        self.console.print(f"[err]✗[/] {msg}", soft_wrap=True)

    def confirm(self, message: str, *, default: bool = False) -> bool:
        """
        Ask the user for confirmation using a standardized Questionary prompt.

        Args:
            message: Confirmation question shown to the user.
            default: Default answer if the user just presses enter.

        Returns:
            True if the user confirms, False otherwise.
        """
        self.console.print("[meta]Use y/n then Enter[/]")
        prompt = questionary.confirm(
            self._q(message),
            default=default,
            style=QUESTIONARY_STYLE_CONFIRM,
            qmark="✦",
            auto_enter=False,
        )
        return bool(prompt.ask())

    def evidence(
        self, job_name: str, lines: Iterable[str], patterns: Sequence[str]
    ) -> None:
        """
        Print the log lines that matched a search, patterns highlighted.

        Log content is rendered as plain Text so that brackets in the logs
        are never interpreted as Rich markup.
        """
        self.console.print(Text(f"===== {job_name} =====", style="title"))
        for line in lines:
            text = Text(line)
            text.highlight_words(patterns, style="match")
            self.console.print(text, soft_wrap=True)
        self.console.print()

    def matches_table(self, results: Iterable[Any], title: str = "Matched jobs") -> None:
        """
        Expects objects with .job_name and .evidence
        (e.g. runaiops.core.search.SearchResult)
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Job", style="ok", no_wrap=True)
        t.add_column("Evidence lines", style="meta", justify="right")

        for r in results:
            t.add_row(escape(r.job_name), str(len(r.evidence)))

        self.console.print(t)

    def deletion_results_table(
        self, outcomes: Iterable[Any], title: str = "Delete results"
    ) -> None:
        """
        Expects objects with .job_name, .succeeded and optional .error
        (e.g. runaiops.core.deletion.DeletionOutcome)
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Job", style="ok")
        t.add_column("Result")

        for o in outcomes:
            error = escape(str(getattr(o, "error", "") or ""))
            t.add_row(
                escape(o.job_name),
                "[ok]DELETED[/]" if o.succeeded else f"[err]FAIL[/] {error}",
            )

        self.console.print(t)


out = Out(console)
err = Out(err_console)
