from pathlib import Path

import pytest

from runaiops.core.config import (
    ConfigError,
    default_config_path,
    load_settings,
    parse_config_text,
)


def test_parse_config_text_reads_shell_assignments():
    text = """
# personal overrides
export RUNAI_JOB_PREFIX="etienne"
RUNAI_BIN=/opt/runai/bin/runai  # pinned version
alias rcp_interactive="rcp -i image"
if [[ -f foo ]]; then
"""

    assert parse_config_text(text) == {
        "RUNAI_JOB_PREFIX": "etienne",
        "RUNAI_BIN": "/opt/runai/bin/runai",
    }


def test_parse_config_text_rejects_unbalanced_quotes():
    with pytest.raises(ConfigError, match="line 1"):
        parse_config_text('RUNAI_JOB_PREFIX="oops')


def test_default_config_path_honors_env():
    assert default_config_path({"RUNAI_CONFIG_FILE": "/tmp/x.sh"}) == Path("/tmp/x.sh")
    assert default_config_path({"XDG_CONFIG_HOME": "/cfg"}) == Path(
        "/cfg/runaiops/config.sh"
    )


def test_load_settings_defaults_to_user(tmp_path):
    env = {"USER": "klee", "RUNAI_CONFIG_FILE": str(tmp_path / "missing.sh")}

    settings = load_settings(env)

    assert settings.job_prefix == "klee"
    assert settings.runai_bin == "runai"
    assert settings.config_file is None


def test_load_settings_env_prefix_beats_user(tmp_path):
    env = {
        "USER": "klee",
        "RUNAI_JOB_PREFIX": "team",
        "RUNAI_CONFIG_FILE": str(tmp_path / "missing.sh"),
    }

    assert load_settings(env).job_prefix == "team"


def test_load_settings_config_file_wins(tmp_path):
    config = tmp_path / "config.sh"
    config.write_text("export RUNAI_JOB_PREFIX=etienne\nRUNAI_BIN=runai-v2\n")
    env = {"USER": "klee", "RUNAI_JOB_PREFIX": "team", "RUNAI_BIN": "runai"}

    settings = load_settings(env, config_file=config)

    assert settings.job_prefix == "etienne"
    assert settings.runai_bin == "runai-v2"
    assert settings.config_file == config


def test_load_settings_without_user_falls_back(tmp_path):
    env = {"RUNAI_CONFIG_FILE": str(tmp_path / "missing.sh")}

    assert load_settings(env).job_prefix == "user"
