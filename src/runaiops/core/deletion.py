"""Bulk job deletion.

Consumes a stream of job names (typically the output of a search) and
deletes each job through the adapter. Individual failures are reported and
counted, never raised; only a missing `runai` executable stops the run, and
it does so before anything is deleted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Protocol

logger = logging.getLogger(__name__)


class DeletionAdapter(Protocol):
    """Interface for job deletion used by the core domain."""

    def ensure_available(self) -> None:
        """Raise DependencyMissingError if the external tool is absent."""
        ...

    def delete_job(self, job_name: str) -> None:
        """Delete a job, raising JobDeletionError on failure."""
        ...


@dataclass(frozen=True)
class DeletionOutcome:
    """Result for a single job delete operation."""

    job_name: str
    succeeded: bool
    error: str | None = None


def iter_job_names(lines: Iterable[str]) -> Iterator[str]:
    """Yield stripped, non-blank job names from raw input lines."""
    for line in lines:
        name = line.strip()
        if name:
            yield name


def delete_all(
    adapter: DeletionAdapter,
    job_names: Iterable[str],
    *,
    on_start: Callable[[str], None] | None = None,
    on_outcome: Callable[[DeletionOutcome], None] | None = None,
    dry_run: bool = False,
) -> int:
    """
    Delete every job read from ``job_names``.

    Args:
        adapter: Run:AI adapter used to delete jobs.
        job_names: Job names, one per item; blank entries are skipped.
        on_start: Called with each job name before it is deleted.
        on_outcome: Called with the outcome of each job as soon as it is known.
        dry_run: Report what would be deleted without deleting anything.

    Returns:
        The number of jobs that were deleted successfully.

    Raises:
        DependencyMissingError: If the `runai` executable is not available.
    """
    adapter.ensure_available()

    count = 0
    for job_name in iter_job_names(job_names):
        if on_start is not None:
            on_start(job_name)

        if dry_run:
            outcome = DeletionOutcome(job_name=job_name, succeeded=False)
        else:
            try:
                adapter.delete_job(job_name)
                outcome = DeletionOutcome(job_name=job_name, succeeded=True)
                count += 1
            except Exception as e:  # keep the stream going; surface per-job errors
                logger.debug("Deleting %s failed", job_name, exc_info=True)
                outcome = DeletionOutcome(job_name=job_name, succeeded=False, error=str(e))

        if on_outcome is not None:
            on_outcome(outcome)

    return count
