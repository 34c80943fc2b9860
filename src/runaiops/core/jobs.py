"""Core job domain models plus listing and candidate selection logic.

This module defines the JobRecord parsed from `runai list jobs` output, the
adapter interface the core expects from the external tool, and the
candidate lister used by the search engine. Parsing is a pure function of
the listing text so it can be tested against literal fixtures, decoupled
from the live CLI.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Protocol

from runaiops.core.selector_builder import build_selector
from runaiops.core.status import StatusFilter

# CSI sequences such as colors (ESC [ 1;32 m) and cursor movement.
_ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")


@dataclass(frozen=True)
class JobRecord:
    """
    One row of the Run:AI job listing.

    Attributes:
        name: Job name (first column of the listing).
        fields: All whitespace separated columns of the row, name included.
        text: The full row text, ANSI sequences stripped.
    """

    name: str
    fields: tuple[str, ...]
    text: str

    @property
    def status_fields(self) -> tuple[str, ...]:
        """Columns other than the job name."""
        return self.fields[1:]

    @property
    def status_text(self) -> str:
        """Row text without the job name column."""
        return " ".join(self.status_fields)


class JobsAdapter(Protocol):
    """Interface for job listing and log retrieval used by the core domain."""

    def list_jobs(self, include_all: bool = False) -> str:
        """Return the raw job listing (header row plus one row per job)."""
        ...

    def fetch_logs(self, job_name: str) -> str:
        """Return the combined log output of a job."""
        ...


def strip_ansi(text: str) -> str:
    """Remove terminal escape sequences from text."""
    return _ANSI_RE.sub("", text)


def parse_job_table(text: str) -> list[JobRecord]:
    """
    Parse the text output of `runai list jobs`.

    The first line is treated as the header and discarded; blank lines are
    skipped. Parsing is tolerant: any other line becomes a record whose
    name is its first whitespace separated column.

    Args:
        text: Raw listing output, possibly containing color codes.

    Returns:
        Parsed rows in listing order.
    """
    lines = strip_ansi(text).splitlines()
    records: list[JobRecord] = []

    for line in lines[1:]:
        fields = tuple(line.split())
        if not fields:
            continue
        records.append(JobRecord(name=fields[0], fields=fields, text=line.strip()))

    return records


def list_candidates(
    adapter: JobsAdapter,
    name_pattern: str,
    status: StatusFilter | None = None,
    *,
    include_all: bool = False,
) -> Iterator[str]:
    """
    List the names of jobs that are search candidates.

    The external listing is invoked exactly once. Empty output, or output
    without matching rows, yields nothing.

    Args:
        adapter: Run:AI adapter used to list jobs.
        name_pattern: Regular expression applied to job names.
        status: Optional normalized status filter.
        include_all: Ask the tool to include jobs it hides by default.

    Returns:
        An iterator over candidate job names, in listing order.
    """
    selector = build_selector(name=name_pattern, status=status)
    text = adapter.list_jobs(include_all)
    return (r.name for r in parse_job_table(text) if selector.matches(r))
