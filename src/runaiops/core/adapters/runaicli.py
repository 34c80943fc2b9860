from __future__ import annotations

import logging
import shutil
import subprocess
from typing import Sequence

from runaiops.core.errors import (
    DependencyMissingError,
    JobDeletionError,
    LogFetchError,
    SubmissionError,
)

logger = logging.getLogger(__name__)


class RunAICliAdapter:
    """Adapter around the `runai` command-line tool."""

    def __init__(self, runai_bin: str = "runai"):
        """Create an adapter invoking the given `runai` executable."""
        self.runai_bin = runai_bin

    def ensure_available(self) -> None:
        """Raise DependencyMissingError if the executable is not on PATH."""
        if shutil.which(self.runai_bin) is None:
            raise DependencyMissingError(self.runai_bin)

    def _run(self, *args: str) -> tuple[int, str]:
        """
        Run a `runai` subcommand.

        stderr is merged into stdout: the tool reports some logs and
        warnings on stderr and callers want all of it.

        Returns:
            Tuple of (return_code, combined_output).

        Raises:
            DependencyMissingError: If the executable cannot be started.
        """
        cmd = [self.runai_bin, *args]
        logger.debug("Running command: %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
                check=False,
            )
        except FileNotFoundError as exc:
            raise DependencyMissingError(self.runai_bin) from exc
        logger.debug("Command exit code: %d", result.returncode)
        return result.returncode, result.stdout or ""

    def list_jobs(self, include_all: bool = False) -> str:
        """Return the text output of `runai list jobs`."""
        args = ["list", "jobs"]
        if include_all:
            args.append("--all")
        _, output = self._run(*args)
        return output

    def fetch_logs(self, job_name: str) -> str:
        """Return the combined log output of a job."""
        cmd = ["logs", job_name]
        try:
            code, output = self._run(*cmd)
        except OSError as exc:
            raise LogFetchError(f"Could not run runai logs: {exc}", command=cmd) from exc
        if code != 0:
            raise LogFetchError(
                f"runai logs {job_name} exited with code {code}",
                command=cmd,
                returncode=code,
                output=output,
            )
        return output

    def delete_job(self, job_name: str) -> None:
        """Delete a job."""
        cmd = ["delete", "job", job_name]
        code, output = self._run(*cmd)
        if code != 0:
            raise JobDeletionError(
                _failure_message(output, f"runai delete job {job_name} exited with code {code}"),
                command=cmd,
                returncode=code,
                output=output,
            )

    def submit_job(self, job_name: str, extra_args: Sequence[str]) -> None:
        """Submit a job, streaming the tool's output to the terminal."""
        cmd = [self.runai_bin, "submit", job_name, *extra_args]
        logger.debug("Running command: %s", " ".join(cmd))
        try:
            # Not captured: `--interactive --attach` submissions need the TTY.
            code = subprocess.call(cmd)
        except FileNotFoundError as exc:
            raise DependencyMissingError(self.runai_bin) from exc
        if code != 0:
            raise SubmissionError(
                f"runai submit {job_name} exited with code {code}",
                command=cmd,
                returncode=code,
            )


def _failure_message(output: str, fallback: str) -> str:
    """Use the last non-blank output line as the error message, if any."""
    lines = [line.strip() for line in output.splitlines() if line.strip()]
    return lines[-1] if lines else fallback

