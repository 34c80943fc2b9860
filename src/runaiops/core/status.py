"""Job status vocabulary, normalization and matching.

`runai list jobs` reports a free-form status column (``Running``,
``Init:1/3``, ``CrashLoopBackOff``, ...). Operators pass a status token on
the command line; this module turns that token into a `StatusFilter`
variant once, up front, and exposes a single function to test a listed
job against it.

Matching is best-effort over the tool's text output: an exact
(case-insensitive) match on one of the row's columns is tried first, then
a substring match on the row's status text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from runaiops.core.errors import InvalidStatusError

if TYPE_CHECKING:
    from runaiops.core.jobs import JobRecord


class JobStatus(str, Enum):
    """
    Canonical lifecycle tokens accepted by ``--status``.

    Values are the lower-cased forms reported by `runai list jobs`.
    """

    RUNNING = "running"
    PENDING = "pending"
    CONTAINER_CREATING = "containercreating"
    TERMINATING = "terminating"
    SUCCEEDED = "succeeded"
    DELETED = "deleted"
    TIMED_OUT = "timedout"
    PREEMPTED = "preempted"
    CONTAINER_CANNOT_RUN = "containercannotrun"
    ERROR = "error"
    FAIL = "fail"
    CRASH_LOOP_BACK_OFF = "crashloopbackoff"
    UNKNOWN = "unknown"
    ERR_IMAGE_PULL = "errimagepull"
    IMAGE_PULL_BACK_OFF = "imagepullbackoff"
    POD_INITIALIZING = "podinitializing"
    INIT_ERROR = "init:error"
    INIT_CRASH_LOOP_BACK_OFF = "init:crashloopbackoff"


_ALIASES = {"failed": JobStatus.FAIL.value}
_ALL_TOKENS = frozenset({"all", "any"})
_ANY_INIT_TOKEN = "init:*"
_INIT_PROGRESS_RE = re.compile(r"^init:(\d+)/(\d+)$")

ALLOWED_STATUS_HELP = (
    "Allowed: all (or any), running, pending, containercreating, terminating, "
    "succeeded, deleted, timedout, preempted, containercannotrun, error, "
    "fail (or failed), crashloopbackoff, errimagepull, imagepullbackoff, "
    "unknown, podinitializing, init:error, init:crashloopbackoff, "
    "init:<a>/<b>, init:*"
)


class StatusFilter:
    """Base class for the normalized status constraint of a search."""

    @property
    def token(self) -> str:
        """Canonical token; normalizing it yields an equal filter."""
        raise NotImplementedError

    def __str__(self) -> str:
        return self.token


@dataclass(frozen=True)
class AllStatuses(StatusFilter):
    """Matches every job regardless of status."""

    @property
    def token(self) -> str:
        return "all"


@dataclass(frozen=True)
class CanonicalStatus(StatusFilter):
    """Matches jobs reporting one specific lifecycle status."""

    status: JobStatus

    @property
    def token(self) -> str:
        return self.status.value


@dataclass(frozen=True)
class AnyInit(StatusFilter):
    """Matches jobs in any ``Init:...`` state (distributed jobs)."""

    @property
    def token(self) -> str:
        return _ANY_INIT_TOKEN


@dataclass(frozen=True)
class InitProgress(StatusFilter):
    """Matches jobs reporting a specific init progress, e.g. ``Init:1/3``."""

    completed: int
    total: int

    @property
    def token(self) -> str:
        return f"init:{self.completed}/{self.total}"


ALL = AllStatuses()
ANY_INIT = AnyInit()


def normalize_status(raw: str | None) -> StatusFilter:
    """
    Normalize a user supplied status token.

    Args:
        raw: Status token as typed by the operator. ``None`` or an empty
             string means ``all``.

    Returns:
        The matching StatusFilter variant.

    Raises:
        InvalidStatusError: If the token is not part of the accepted
            vocabulary. The message enumerates the accepted values.
    """
    value = (raw or "all").strip().casefold()
    value = _ALIASES.get(value, value)

    if value in _ALL_TOKENS:
        return ALL
    if value == _ANY_INIT_TOKEN:
        return ANY_INIT

    progress = _INIT_PROGRESS_RE.match(value)
    if progress:
        return InitProgress(int(progress.group(1)), int(progress.group(2)))

    try:
        return CanonicalStatus(JobStatus(value))
    except ValueError:
        raise InvalidStatusError(
            f"invalid --status '{raw}'\n{ALLOWED_STATUS_HELP}"
        ) from None


def status_matches(status_filter: StatusFilter, record: JobRecord) -> bool:
    """
    Check whether a listed job satisfies a status filter.

    Args:
        status_filter: Normalized filter (see `normalize_status`).
        record: Parsed row of the job listing.

    Returns:
        True if the job's status satisfies the filter.
    """
    if isinstance(status_filter, AllStatuses):
        return True

    status_text = record.status_text.casefold()

    if isinstance(status_filter, AnyInit):
        return "init:" in status_text

    token = status_filter.token
    if any(field.casefold() == token for field in record.status_fields):
        return True
    return token in status_text
