"""Job selector abstractions and implementations.

This module defines the selector system used to decide whether a row of
the Run:AI job listing is a search candidate. Selectors encapsulate
matching logic and can be composed with a logical AND
to express complex selection rules.

Selectors are pure, side-effect-free objects and are intended to be
reusable across different frontends such as CLI commands, automation
scripts, and tests.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from runaiops.core.errors import InvalidQueryError
from runaiops.core.status import StatusFilter, status_matches

if TYPE_CHECKING:
    from runaiops.core.jobs import JobRecord


class JobSelector(ABC):
    """
    Abstract base class for all job selectors.

    A JobSelector encapsulates a single piece of matching logic that
    determines whether a given JobRecord satisfies a specific criterion.
    """

    @abstractmethod
    def matches(self, record: JobRecord) -> bool:
        """
        Determine whether the given job matches this selector.

        Args:
            record: Parsed job listing row to evaluate.

        Returns:
            True if the job matches the selector criteria, False otherwise.
        """
        ...


class NameRegexSelector(JobSelector):
    """
    Selector that matches jobs based on a regular expression applied
    to the job name (first column of the listing).
    """

    def __init__(self, pattern: str):
        """
        Create a name-based regex selector.

        Args:
            pattern: Regular expression pattern used to match job names.
        """
        try:
            self.regex = re.compile(pattern)
        except re.error as exc:
            raise InvalidQueryError(f"Invalid regex expression: {exc}") from exc

    def matches(self, record: JobRecord) -> bool:
        """
        Check whether the job name matches the configured regex pattern.
        """
        return bool(self.regex.search(record.name))


class StatusSelector(JobSelector):
    """
    Selector that matches jobs whose listed status satisfies a StatusFilter.
    """

    def __init__(self, status: StatusFilter):
        self.status = status

    def matches(self, record: JobRecord) -> bool:
        return status_matches(self.status, record)


class AndSelector(JobSelector):
    """
    Composite selector that matches a job only if all child selectors match.
    """

    def __init__(self, selectors: list[JobSelector]):
        """
        Create a logical AND selector.

        Args:
            selectors: List of selectors that must all match.
        """
        self.selectors = selectors

    def matches(self, record: JobRecord) -> bool:
        """
        Check whether all child selectors match the job.
        """
        return all(s.matches(record) for s in self.selectors)
