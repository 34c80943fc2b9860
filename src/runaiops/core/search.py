"""Concurrent job search.

This module contains the search coordinator: it validates a query, lists
candidate jobs once, inspects their logs on a bounded thread pool and
streams back the jobs whose logs contain every requested pattern.

Concurrency is explicit and bounded: at most ``parallelism`` log fetches
are in flight at any time, remaining candidates wait in the pool's queue.
Each evaluation is isolated, so a failing job never cancels its siblings.
Results are yielded from the consuming thread as soon as they complete,
which is also the only place where results are aggregated.
"""

from __future__ import annotations

import logging
import re
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Iterator, Protocol, Sequence

from runaiops.core.errors import InvalidQueryError
from runaiops.core.jobs import JobsAdapter, list_candidates
from runaiops.core.logs import LogMatch, evaluate_job
from runaiops.core.status import ALL, StatusFilter

logger = logging.getLogger(__name__)

DEFAULT_PARALLELISM = 8


@dataclass(frozen=True)
class SearchQuery:
    """
    Criteria for a job search.

    Attributes:
        name_pattern: Regular expression applied to job names.
        log_patterns: Literal strings that must all appear in a job's logs.
        status: Normalized status filter applied before log inspection.
        parallelism: Maximum number of concurrent log fetches.
        show_evidence: Collect matching log lines for each result.
        include_all: Ask the tool to list jobs it hides by default.
    """

    name_pattern: str
    log_patterns: tuple[str, ...]
    status: StatusFilter = ALL
    parallelism: int = DEFAULT_PARALLELISM
    show_evidence: bool = False
    include_all: bool = False


@dataclass(frozen=True)
class SearchResult:
    """A job whose logs contain every pattern of the query."""

    job_name: str
    evidence: tuple[str, ...] = field(default=())


class SearchProgress(Protocol):
    """Observer notified as a search advances (called from the consuming thread)."""

    def started(self, total: int) -> None:
        """Called once the candidate set is known."""
        ...

    def advance(self, job_name: str, matched: bool) -> None:
        """Called after each candidate has been evaluated."""
        ...


def build_query(
    name_pattern: str | None,
    log_patterns: Sequence[str] | None,
    *,
    status: StatusFilter = ALL,
    parallelism: int = DEFAULT_PARALLELISM,
    show_evidence: bool = False,
    include_all: bool = False,
) -> SearchQuery:
    """Build and validate a SearchQuery from loosely typed inputs."""
    query = SearchQuery(
        name_pattern=name_pattern or "",
        log_patterns=tuple(log_patterns or ()),
        status=status,
        parallelism=parallelism,
        show_evidence=show_evidence,
        include_all=include_all,
    )
    validate_query(query)
    return query


def validate_query(query: SearchQuery) -> None:
    """
    Validate a query before any external call is made.

    Raises:
        InvalidQueryError: If the name pattern is missing or not a valid
            regular expression, no log pattern is given, or parallelism
            is not positive.
    """
    if not query.name_pattern:
        raise InvalidQueryError("A job name pattern is required")
    if not query.log_patterns:
        raise InvalidQueryError("At least one log pattern is required")
    if query.parallelism < 1:
        raise InvalidQueryError("parallelism must be >= 1")
    try:
        re.compile(query.name_pattern)
    except re.error as exc:
        raise InvalidQueryError(f"Invalid regex expression: {exc}") from exc


def _evaluate_isolated(
    adapter: JobsAdapter, job_name: str, query: SearchQuery
) -> LogMatch:
    """Run one evaluation, turning unexpected failures into a non-match."""
    try:
        return evaluate_job(
            adapter,
            job_name,
            query.log_patterns,
            want_evidence=query.show_evidence,
        )
    except Exception:  # noqa: BLE001 - one job must not abort the batch
        logger.warning("Log inspection failed for %s", job_name, exc_info=True)
        return LogMatch(job_name=job_name, matched=False, fetch_failed=True)


def _iter_results(
    adapter: JobsAdapter,
    query: SearchQuery,
    progress: SearchProgress | None,
) -> Iterator[SearchResult]:
    candidates = list(
        list_candidates(
            adapter,
            query.name_pattern,
            query.status,
            include_all=query.include_all,
        )
    )
    logger.debug("Found %d candidate job(s)", len(candidates))

    if progress is not None:
        progress.started(len(candidates))
    if not candidates:
        return

    pool = ThreadPoolExecutor(
        max_workers=query.parallelism, thread_name_prefix="runaiops-search"
    )
    try:
        futures: list[Future[LogMatch]] = [
            pool.submit(_evaluate_isolated, adapter, name, query)
            for name in candidates
        ]

        for f in as_completed(futures):
            match = f.result()
            if progress is not None:
                progress.advance(match.job_name, match.matched)
            if match.matched:
                yield SearchResult(job_name=match.job_name, evidence=match.evidence)
    finally:
        # Queued evaluations are dropped if the consumer stops iterating early.
        pool.shutdown(wait=True, cancel_futures=True)


def search(
    adapter: JobsAdapter,
    query: SearchQuery,
    *,
    progress: SearchProgress | None = None,
) -> Iterator[SearchResult]:
    """
    Search jobs by name, status and log content.

    The query is validated immediately; listing and log inspection happen
    lazily as the returned iterator is consumed. Results are yielded in
    completion order, not listing order.

    Args:
        adapter: Run:AI adapter used to list jobs and fetch logs.
        query: Search criteria.
        progress: Optional observer for per-candidate progress.

    Returns:
        An iterator over SearchResult objects.

    Raises:
        InvalidQueryError: If the query is invalid (raised before any
            external call).
    """
    validate_query(query)
    return _iter_results(adapter, query, progress)


def collect(
    adapter: JobsAdapter,
    query: SearchQuery,
    *,
    progress: SearchProgress | None = None,
) -> list[SearchResult]:
    """Run a search to completion and return all results."""
    return list(search(adapter, query, progress=progress))
