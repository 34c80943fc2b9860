"""Commands for finding, deleting and submitting Run:AI jobs."""

import sys
from pathlib import Path

import typer
from rich.markup import escape

from runaiops.cli.common.context import JobsAppContext, build_jobs_context
from runaiops.cli.common.exits import die, exit_from_exc, ok_exit, warn_exit
from runaiops.cli.common.options import (
    AllOpt,
    ConfigOpt,
    DebugOpt,
    DryRunOpt,
    LogPatternsArg,
    NamePatternArg,
    ParallelOpt,
    PrefixOpt,
    ShowOpt,
    StatusOpt,
    YesOpt,
)
from runaiops.cli.common.output import err, out
from runaiops.cli.common.progress import SearchProgressDisplay
from runaiops.cli.tui import select_jobs as tui_select_jobs
from runaiops.core.deletion import DeletionOutcome, delete_all
from runaiops.core.errors import (
    DependencyMissingError,
    InvalidQueryError,
    InvalidStatusError,
    SubmissionError,
)
from runaiops.core.search import SearchQuery, build_query, search
from runaiops.core.status import normalize_status
from runaiops.core.submit import submit_job

FIND_USAGE = (
    "Usage: runaiops jobs find <jobname_regex> <log_pattern1> [log_pattern2 ...] "
    "[--status S] [--parallel N] [--show] [--debug]"
)
PRUNE_USAGE = (
    "Usage: runaiops jobs prune <jobname_regex> <log_pattern1> [log_pattern2 ...] "
    "[--status S] [--parallel N] [--yes] [--dry-run]"
)

app = typer.Typer(
    help="Find, delete and submit Run:AI jobs",
    no_args_is_help=False,
    invoke_without_command=True,
)


@app.callback()
def _init(ctx: typer.Context, config: Path | None = ConfigOpt):
    """Initialize jobs context."""
    ctx.obj = build_jobs_context(config)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)


def _query_or_exit(
    name_pattern: str | None,
    patterns: list[str] | None,
    *,
    status: str,
    parallel: int,
    show: bool = False,
    include_all: bool = False,
    usage: str = FIND_USAGE,
) -> SearchQuery:
    """Validate search arguments and convert failures into CLI exits."""
    if not name_pattern or not patterns:
        die(usage, code=1)

    try:
        return build_query(
            name_pattern,
            patterns,
            status=normalize_status(status),
            parallelism=parallel,
            show_evidence=show,
            include_all=include_all,
        )
    except InvalidStatusError as exc:
        exit_from_exc(exc, message=str(exc), code=1)
    except InvalidQueryError as exc:
        exit_from_exc(exc, message=f"{exc}\n{usage}", code=1)


def _ensure_runai_or_exit(appctx: JobsAppContext) -> None:
    try:
        appctx.adapter.ensure_available()
    except DependencyMissingError as exc:
        exit_from_exc(exc, message=str(exc), code=1)


@app.command(context_settings={"ignore_unknown_options": True})
def find(
    ctx: typer.Context,
    name_pattern: str | None = NamePatternArg,
    patterns: list[str] | None = LogPatternsArg,
    status: str = StatusOpt,
    parallel: int = ParallelOpt,
    show: bool = ShowOpt,
    debug: bool = DebugOpt,
    include_all: bool = AllOpt,
):
    """
    Find jobs whose logs contain ALL the given patterns.

    Matching job names are printed to stdout, one per line, as soon as they
    are found; pipe them into `runaiops jobs delete` to act on them.
    """
    appctx: JobsAppContext = ctx.obj
    del debug  # accepted for compatibility, no effect yet

    query = _query_or_exit(
        name_pattern,
        patterns,
        status=status,
        parallel=parallel,
        show=show,
        include_all=include_all,
    )
    _ensure_runai_or_exit(appctx)

    found = 0
    for result in search(appctx.adapter, query):
        found += 1
        typer.echo(result.job_name)
        if query.show_evidence:
            err.evidence(result.job_name, result.evidence, query.log_patterns)

    if not found:
        warn_exit("No matching jobs", code=0)


@app.command()
def delete(ctx: typer.Context, dry_run: bool = DryRunOpt):
    """
    Delete the jobs whose names are read from stdin (one per line).
    """
    appctx: JobsAppContext = ctx.obj

    def _on_start(job_name: str) -> None:
        out.info(f"Deleting job: {escape(job_name)}")

    def _on_outcome(outcome: DeletionOutcome) -> None:
        name = escape(outcome.job_name)
        if outcome.succeeded:
            out.success(f"Deleted {name}")
        elif dry_run:
            out.warn(f"Dry-run: {name} not deleted")
        else:
            out.error(f"Failed to delete {name}: {escape(outcome.error or 'unknown error')}")

    try:
        count = delete_all(
            appctx.adapter,
            sys.stdin,
            on_start=_on_start,
            on_outcome=_on_outcome,
            dry_run=dry_run,
        )
    except DependencyMissingError as exc:
        exit_from_exc(exc, message=str(exc), code=1)

    out.success(f"Deleted {count} job(s)")


@app.command(
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True}
)
def submit(
    ctx: typer.Context,
    prefix: str | None = PrefixOpt,
    dry_run: bool = DryRunOpt,
):
    """
    Submit a job named `<prefix>-<YYMMDD-HHMMSS>`.

    Any extra arguments are passed through to `runai submit`.
    """
    appctx: JobsAppContext = ctx.obj
    job_prefix = prefix or appctx.settings.job_prefix

    def _announce(job_name: str) -> None:
        typer.echo(f"Launching job: {job_name}")

    try:
        submit_job(
            appctx.adapter,
            job_prefix,
            ctx.args,
            dry_run=dry_run,
            on_name=_announce,
        )
    except ValueError as exc:
        exit_from_exc(exc, message=str(exc), code=1)
    except DependencyMissingError as exc:
        exit_from_exc(exc, message=str(exc), code=1)
    except SubmissionError as exc:
        exit_from_exc(exc, message=str(exc), code=1)

    if dry_run:
        ok_exit("Dry-run enabled: nothing was submitted")


@app.command(context_settings={"ignore_unknown_options": True})
def prune(
    ctx: typer.Context,
    name_pattern: str | None = NamePatternArg,
    patterns: list[str] | None = LogPatternsArg,
    status: str = StatusOpt,
    parallel: int = ParallelOpt,
    include_all: bool = AllOpt,
    yes: bool = YesOpt,
    dry_run: bool = DryRunOpt,
):
    """
    Find jobs whose logs contain ALL the given patterns, then delete them.

    Matches are listed and can be picked interactively before deletion.
    """
    appctx: JobsAppContext = ctx.obj

    query = _query_or_exit(
        name_pattern,
        patterns,
        status=status,
        parallel=parallel,
        show=True,
        include_all=include_all,
        usage=PRUNE_USAGE,
    )
    _ensure_runai_or_exit(appctx)

    with SearchProgressDisplay() as progress:
        results = list(search(appctx.adapter, query, progress=progress))

    if not results:
        warn_exit("No matching jobs", code=0)

    results.sort(key=lambda r: r.job_name)
    out.matches_table(results)

    selected = [r.job_name for r in results] if yes else tui_select_jobs(results)
    if not selected:
        warn_exit("No jobs selected", code=0)

    if dry_run:
        warn_exit("Dry-run enabled: no jobs were deleted", code=0)

    if not yes and not out.confirm(f"Delete {len(selected)} job(s)?"):
        ok_exit("Cancelled")

    outcomes: list[DeletionOutcome] = []
    with out.status("Deleting jobs..."):
        count = delete_all(appctx.adapter, selected, on_outcome=outcomes.append)

    out.deletion_results_table(outcomes)
    out.success(f"Deleted {count} job(s)")

    if count != len(outcomes):
        raise typer.Exit(1)
