"""Selector construction utilities.

This module translates search criteria (a name regex and an optional
status filter) into a concrete JobSelector. It centralizes validation and
composition so the lister only ever deals with a single selector.
"""

from runaiops.core.errors import InvalidQueryError
from runaiops.core.selectors import (
    AndSelector,
    JobSelector,
    NameRegexSelector,
    StatusSelector,
)
from runaiops.core.status import AllStatuses, StatusFilter


def build_selector(
    *,
    name: str | None,
    status: StatusFilter | None = None,
) -> JobSelector:
    """
    Build a JobSelector from a name pattern and an optional status filter.

    The status selector is omitted entirely for ``all``, so listing rows
    are then only tested against the name pattern.

    Args:
        name: Regular expression used to match job names.
        status: Normalized status filter, or None for all statuses.

    Returns:
        A JobSelector instance combining the criteria with logical AND.

    Raises:
        InvalidQueryError: If no name pattern is given or it is not a
            valid regular expression.
    """
    if not name:
        raise InvalidQueryError("A job name pattern is required")

    selectors: list[JobSelector] = [NameRegexSelector(name)]

    if status is not None and not isinstance(status, AllStatuses):
        selectors.append(StatusSelector(status))

    if len(selectors) == 1:
        return selectors[0]

    return AndSelector(selectors)
