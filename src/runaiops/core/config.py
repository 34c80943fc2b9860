"""Configuration resolution.

Settings are resolved once, at the CLI boundary, and then passed around
explicitly. Sources, highest precedence first:

1. the optional config file (shell style ``KEY=VALUE`` lines, ``export``
   allowed), located via ``$RUNAI_CONFIG_FILE`` or
   ``$XDG_CONFIG_HOME/runaiops/config.sh``
2. environment variables (``RUNAI_JOB_PREFIX``, ``RUNAI_BIN``)
3. built-in defaults (``$USER`` for the prefix, ``runai`` for the binary)
"""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

_CONFIG_FILE_ENV = "RUNAI_CONFIG_FILE"
_PREFIX_KEY = "RUNAI_JOB_PREFIX"
_BIN_KEY = "RUNAI_BIN"
_DEFAULT_BIN = "runai"
_DEFAULT_PREFIX = "user"


class ConfigError(ValueError):
    """Raised when the config file cannot be parsed."""


@dataclass(frozen=True)
class Settings:
    """Resolved runai-ops configuration."""

    job_prefix: str
    runai_bin: str = _DEFAULT_BIN
    config_file: Path | None = None


def default_config_path(env: Mapping[str, str]) -> Path:
    """Return the config file location, honoring env overrides."""
    explicit = env.get(_CONFIG_FILE_ENV)
    if explicit:
        return Path(explicit).expanduser()
    xdg = env.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "runaiops" / "config.sh"


def parse_config_text(text: str) -> dict[str, str]:
    """
    Parse shell style assignments.

    Only ``KEY=VALUE`` lines (optionally prefixed with ``export``) are
    read; comments, blank lines and any other shell statements are ignored.
    Values may be quoted.
    """
    values: dict[str, str] = {}
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export ") :].lstrip()

        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key.isidentifier():
            continue

        try:
            tokens = shlex.split(value, comments=True)
        except ValueError as exc:
            raise ConfigError(f"line {lineno}: {exc}") from exc
        values[key] = " ".join(tokens)
    return values


def load_config_file(path: Path) -> dict[str, str]:
    """Read a config file; a missing file yields no values."""
    if not path.is_file():
        return {}
    try:
        return parse_config_text(path.read_text(encoding="utf-8"))
    except ConfigError as exc:
        raise ConfigError(f"Invalid config file {path}: {exc}") from exc


def load_settings(
    env: Mapping[str, str] | None = None,
    config_file: Path | None = None,
) -> Settings:
    """
    Resolve settings from the config file, the environment and defaults.

    Args:
        env: Environment mapping (defaults to ``os.environ``).
        config_file: Explicit config file path, overriding the default
                     location.

    Returns:
        The resolved Settings.

    Raises:
        ConfigError: If the config file exists but cannot be parsed.
    """
    env = os.environ if env is None else env
    path = config_file or default_config_path(env)
    file_values = load_config_file(path)

    prefix = (
        file_values.get(_PREFIX_KEY)
        or env.get(_PREFIX_KEY)
        or env.get("USER")
        or _DEFAULT_PREFIX
    )
    runai_bin = file_values.get(_BIN_KEY) or env.get(_BIN_KEY) or _DEFAULT_BIN

    return Settings(
        job_prefix=prefix,
        runai_bin=runai_bin,
        config_file=path if path.is_file() else None,
    )
