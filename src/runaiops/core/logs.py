"""Log predicate evaluation for a single job.

A job satisfies a search when every literal pattern occurs somewhere in its
logs. This is the unit of work the search coordinator runs concurrently, so
it never raises for a job whose logs cannot be fetched: that job simply
does not match.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Protocol, Sequence

from runaiops.core.errors import LogFetchError

logger = logging.getLogger(__name__)


class LogsAdapter(Protocol):
    """Interface for log retrieval used by the evaluator."""

    def fetch_logs(self, job_name: str) -> str:
        """Return the combined log output of a job."""
        ...


@dataclass(frozen=True)
class LogMatch:
    """
    Outcome of evaluating one job's logs.

    Attributes:
        job_name: Name of the evaluated job.
        matched: True if every pattern was found.
        evidence: Log lines containing at least one pattern (only filled
                  when the job matched and evidence was requested).
        fetch_failed: True if the logs could not be fetched.
    """

    job_name: str
    matched: bool
    evidence: tuple[str, ...] = ()
    fetch_failed: bool = False


def logs_contain_all(text: str, patterns: Sequence[str]) -> bool:
    """Return True if every literal pattern occurs in text."""
    return all(p in text for p in patterns)


def combined_matcher(patterns: Sequence[str]) -> re.Pattern[str]:
    """Compile a single regex matching any of the literal patterns."""
    return re.compile("|".join(re.escape(p) for p in patterns))


def evidence_lines(text: str, patterns: Sequence[str]) -> tuple[str, ...]:
    """
    Collect the log lines that contain at least one pattern.

    The text is scanned once with a combined matcher rather than once per
    pattern.
    """
    matcher = combined_matcher(patterns)
    return tuple(line for line in text.splitlines() if matcher.search(line))


def evaluate_job(
    adapter: LogsAdapter,
    job_name: str,
    patterns: Sequence[str],
    *,
    want_evidence: bool = False,
) -> LogMatch:
    """
    Fetch a job's logs and test that all patterns occur in them.

    Args:
        adapter: Run:AI adapter used to fetch logs.
        job_name: Job to inspect.
        patterns: Literal (non-regex) substrings that must all occur.
        want_evidence: Also collect the matching log lines.

    Returns:
        A LogMatch; a failed fetch is reported as a non-match.
    """
    try:
        text = adapter.fetch_logs(job_name)
    except LogFetchError as exc:
        logger.debug("Skipping %s: could not fetch logs (%s)", job_name, exc)
        return LogMatch(job_name=job_name, matched=False, fetch_failed=True)

    if not logs_contain_all(text, patterns):
        return LogMatch(job_name=job_name, matched=False)

    evidence = evidence_lines(text, patterns) if want_evidence else ()
    return LogMatch(job_name=job_name, matched=True, evidence=evidence)
