"""Exit handling utilities for the CLI.

Diagnostics always go to stderr so they never mix with piped job names.
Error messages are printed verbatim (no Rich markup).
"""

from typing import NoReturn

import typer
from rich.markup import escape

from runaiops.cli.common.output import err


def ok_exit(msg: str | None = None) -> NoReturn:
    """Exit successfully with an optional informational message."""
    if msg:
        err.info(msg)
    raise typer.Exit(0)


def die(msg: str, code: int = 1) -> NoReturn:
    """Exit with an error message and optional exit code."""
    err.error(escape(msg))
    raise typer.Exit(code)


def warn_exit(msg: str, code: int = 0) -> NoReturn:
    """Exit with a warning message and optional exit code."""
    err.warn(msg)
    raise typer.Exit(code)


def exit_from_exc(exc: Exception, *, message: str, code: int = 1) -> NoReturn:
    """
    Helper function to print an error message and exit with a given code.

    Exists to satisfy pylint W0707 and to standardize error exits.
    """
    err.error(escape(message))
    raise typer.Exit(code) from exc
