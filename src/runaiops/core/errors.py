"""Error taxonomy for runai-ops.

Validation errors are raised before any call to the external tool.
Command errors carry the failing command and its combined output so that
callers can decide whether a failure is fatal (submission) or recoverable
per job (log fetches, deletions).
"""

from __future__ import annotations

from typing import Sequence


class RunaiOpsError(Exception):
    """Base class for all runai-ops errors."""


class InvalidQueryError(RunaiOpsError, ValueError):
    """Raised when a search query is malformed (missing name pattern, no log patterns, ...)."""


class InvalidStatusError(InvalidQueryError):
    """Raised when a status token is outside the accepted vocabulary."""


class DependencyMissingError(RunaiOpsError):
    """Raised when the `runai` executable cannot be found."""

    def __init__(self, binary: str):
        self.binary = binary
        super().__init__(f"{binary} command not found")


class CommandError(RunaiOpsError):
    """Raised when an external `runai` command exits with a non-zero code."""

    def __init__(
        self,
        message: str,
        *,
        command: Sequence[str] = (),
        returncode: int | None = None,
        output: str = "",
    ):
        self.command = list(command)
        self.returncode = returncode
        self.output = output
        super().__init__(message)


class LogFetchError(CommandError):
    """Raised when logs for a job cannot be fetched."""


class JobDeletionError(CommandError):
    """Raised when a job cannot be deleted."""


class SubmissionError(CommandError):
    """Raised when `runai submit` fails."""
