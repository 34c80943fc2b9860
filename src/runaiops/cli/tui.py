"""Terminal UI utilities for runai-ops."""

from __future__ import annotations

import questionary

from runaiops.cli.common.tui_style import QUESTIONARY_STYLE_SELECT
from runaiops.core.search import SearchResult

_MAX_JOB_NAME_WIDTH = 96


def _truncate(text: str, max_len: int) -> str:
    """Return text capped at max_len characters using an ASCII ellipsis."""
    if max_len <= 3 or len(text) <= max_len:
        return text[:max_len]
    return f"{text[: max_len - 3]}..."


def _job_choice_title(result: SearchResult, *, name_width: int) -> str:
    """Format one choice as `<name>  (<n> matching lines)` with aligned counts."""
    short_name = _truncate(result.job_name, _MAX_JOB_NAME_WIDTH)
    lines = len(result.evidence)
    suffix = "line" if lines == 1 else "lines"
    return f"{short_name.ljust(name_width)}  ({lines} matching {suffix})"


def select_jobs(results: list[SearchResult]) -> list[str]:
    """Display a checkbox prompt to select matched jobs.

    All jobs start checked; the operator unticks the ones to keep.

    Args:
        results: Search results to choose from.

    Returns:
        The selected job names, or an empty list if none selected.
    """
    shown_names = [_truncate(r.job_name, _MAX_JOB_NAME_WIDTH) for r in results]
    name_width = max((len(name) for name in shown_names), default=0)

    choices = [
        questionary.Choice(
            title=_job_choice_title(r, name_width=name_width),
            value=r.job_name,
            checked=True,
        )
        for r in results
    ]

    return (
        questionary.checkbox(
            "Select jobs to delete:",
            choices=choices,
            style=QUESTIONARY_STYLE_SELECT,
        ).ask()
        or []
    )
