"""CLI application for Run:AI job operations."""

import logging

import typer

from runaiops.cli.commands.jobs import app as jobs_app
from runaiops.cli.common.options import VerboseOpt
from runaiops.logging import configure_logging

app = typer.Typer(
    help="runaiops - find, delete and submit Run:AI jobs",
    no_args_is_help=True,
)


@app.callback()
def _main(verbose: bool = VerboseOpt):
    """Configure logging for every command."""
    configure_logging(logging.DEBUG if verbose else logging.WARNING)


app.add_typer(jobs_app, name="jobs", help="Find / delete / submit Run:AI jobs.")


if __name__ == "__main__":
    app()
