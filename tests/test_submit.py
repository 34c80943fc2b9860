import re
from datetime import datetime

import pytest

from runaiops.core.submit import build_job_name, submit_job


class _SubmitStub:
    def __init__(self):
        self.submitted: list[tuple[str, list[str]]] = []

    def submit_job(self, job_name: str, extra_args) -> None:
        self.submitted.append((job_name, list(extra_args)))


def test_build_job_name_uses_compact_timestamp():
    now = datetime(2024, 3, 7, 9, 5, 2)

    assert build_job_name("alice", now) == "alice-240307-090502"


def test_build_job_name_defaults_to_current_time():
    assert re.fullmatch(r"bob-\d{6}-\d{6}", build_job_name("bob"))


def test_build_job_name_rejects_empty_prefix():
    with pytest.raises(ValueError):
        build_job_name("")


def test_submit_job_passes_extra_args_through():
    stub = _SubmitStub()
    announced = []

    name = submit_job(
        stub,
        "alice",
        ["-i", "pytorch:latest", "-g", "1"],
        now=datetime(2024, 1, 2, 3, 4, 5),
        on_name=announced.append,
    )

    assert name == "alice-240102-030405"
    assert announced == [name]
    assert stub.submitted == [(name, ["-i", "pytorch:latest", "-g", "1"])]


def test_submit_job_dry_run_only_generates_name():
    stub = _SubmitStub()

    name = submit_job(stub, "alice", ["-g", "1"], dry_run=True)

    assert name.startswith("alice-")
    assert stub.submitted == []
