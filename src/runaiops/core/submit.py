"""Job submission with generated, timestamped names."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Protocol, Sequence


class SubmitAdapter(Protocol):
    """Interface for job submission."""

    def submit_job(self, job_name: str, extra_args: Sequence[str]) -> None:
        """Submit a job, raising SubmissionError on failure."""
        ...


def build_job_name(prefix: str, now: datetime | None = None) -> str:
    """Return ``<prefix>-<YYMMDD-HHMMSS>``."""
    if not prefix:
        raise ValueError("job prefix must not be empty")
    now = now or datetime.now()
    return f"{prefix}-{now:%y%m%d-%H%M%S}"


def submit_job(
    adapter: SubmitAdapter,
    prefix: str,
    extra_args: Sequence[str] = (),
    *,
    now: datetime | None = None,
    dry_run: bool = False,
    on_name: Callable[[str], None] | None = None,
) -> str:
    """
    Submit a job under a generated name.

    Args:
        adapter: Run:AI adapter used to submit the job.
        prefix: Job name prefix (usually the user name).
        extra_args: Arguments passed through to `runai submit`.
        now: Timestamp used for the name (defaults to the current time).
        dry_run: Only generate the name.
        on_name: Called with the generated name before submission.

    Returns:
        The generated job name.
    """
    job_name = build_job_name(prefix, now)
    if on_name is not None:
        on_name(job_name)
    if not dry_run:
        adapter.submit_job(job_name, list(extra_args))
    return job_name
