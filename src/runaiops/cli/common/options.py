"""Common CLI options and arguments for the CLI."""

import typer

from runaiops.core.search import DEFAULT_PARALLELISM

ConfigOpt = typer.Option(
    None,
    "--config",
    help="Config file with RUNAI_JOB_PREFIX / RUNAI_BIN assignments",
    dir_okay=False,
)

NamePatternArg = typer.Argument(
    None,
    metavar="NAME_PATTERN",
    help="Regex on job name (first column of `runai list jobs`)",
    show_default=False,
)

LogPatternsArg = typer.Argument(
    None,
    metavar="PATTERN...",
    help="Literal strings that must ALL appear in the job logs",
    show_default=False,
)

StatusOpt = typer.Option(
    "all",
    "--status",
    "-s",
    help=(
        "Only inspect jobs with this status (running, pending, succeeded, "
        "failed, init:*, init:1/3, ...)"
    ),
)

ParallelOpt = typer.Option(
    DEFAULT_PARALLELISM,
    "--parallel",
    "-P",
    help="Number of job logs to inspect in parallel",
)

ShowOpt = typer.Option(
    False,
    "--show",
    help="Print highlighted matching log lines to stderr",
)

DebugOpt = typer.Option(
    False,
    "--debug",
    help="Reserved, currently has no effect",
)

AllOpt = typer.Option(
    False,
    "--all",
    help="Also list jobs hidden by default (`runai list jobs --all`)",
)

PrefixOpt = typer.Option(
    None,
    "--prefix",
    help="Job name prefix (overrides RUNAI_JOB_PREFIX)",
)

YesOpt = typer.Option(
    False,
    "--yes",
    "-y",
    help="Delete every matched job without prompting",
)

DryRunOpt = typer.Option(
    False,
    "--dry-run",
    help="Show what would happen, but don't change anything",
)

VerboseOpt = typer.Option(
    False,
    "--verbose",
    "-v",
    help="Enable debug logging on stderr",
)
