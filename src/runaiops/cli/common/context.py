"""Application context management for the CLI."""

from dataclasses import dataclass
from pathlib import Path

from runaiops.cli.common.exits import die
from runaiops.core.adapters.runaicli import RunAICliAdapter
from runaiops.core.config import ConfigError, Settings, load_settings


@dataclass
class JobsAppContext:
    """Application context holding resolved settings and the Run:AI adapter."""

    settings: Settings
    adapter: RunAICliAdapter


def build_jobs_context(config_file: Path | None = None) -> JobsAppContext:
    """Build and return the application context.

    Settings are resolved here, once per invocation. Building the context
    never calls the `runai` tool; commands check for it themselves once
    their own arguments are validated.

    Args:
        config_file: Optional config file overriding the default location.

    Returns:
        JobsAppContext: Application context with settings and adapter.
    """
    try:
        settings = load_settings(
            config_file=config_file.expanduser() if config_file else None
        )
    except ConfigError as exc:
        die(str(exc), code=1)
    adapter = RunAICliAdapter(settings.runai_bin)
    return JobsAppContext(settings=settings, adapter=adapter)
