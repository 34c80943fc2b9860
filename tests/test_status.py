import pytest

from runaiops.core.errors import InvalidQueryError, InvalidStatusError
from runaiops.core.jobs import JobRecord
from runaiops.core.status import (
    ALL,
    ANY_INIT,
    AllStatuses,
    AnyInit,
    CanonicalStatus,
    InitProgress,
    JobStatus,
    normalize_status,
    status_matches,
)


def _record(line: str) -> JobRecord:
    fields = tuple(line.split())
    return JobRecord(name=fields[0], fields=fields, text=line)


@pytest.mark.parametrize("raw", ["all", "ANY", " All ", "", None])
def test_normalize_all_variants(raw):
    assert normalize_status(raw) == AllStatuses()


def test_normalize_canonical_tokens_case_insensitive():
    assert normalize_status("RUNNING") == CanonicalStatus(JobStatus.RUNNING)
    assert normalize_status("Init:CrashLoopBackOff") == CanonicalStatus(
        JobStatus.INIT_CRASH_LOOP_BACK_OFF
    )


def test_failed_is_an_alias_of_fail():
    assert normalize_status("failed") == normalize_status("fail")
    assert normalize_status("Failed").token == "fail"


def test_init_progress_and_wildcard_are_distinct():
    first = normalize_status("init:1/3")
    second = normalize_status("Init:2/5")

    assert first == InitProgress(1, 3)
    assert second == InitProgress(2, 5)
    assert first != second
    assert normalize_status("init:*") == AnyInit()
    assert first != ANY_INIT


@pytest.mark.parametrize("member", list(JobStatus))
def test_normalization_is_idempotent_for_every_token(member):
    status = normalize_status(member.value)

    assert normalize_status(status.token) == status


@pytest.mark.parametrize("raw", ["init:*", "init:3/4", "all", "failed"])
def test_normalization_is_idempotent_for_special_tokens(raw):
    status = normalize_status(raw)

    assert normalize_status(str(status)) == status


@pytest.mark.parametrize("raw", ["bogus", "init:a/b", "init:1/", "run", "init:1/3x"])
def test_invalid_status_lists_allowed_values(raw):
    with pytest.raises(InvalidStatusError) as excinfo:
        normalize_status(raw)

    message = str(excinfo.value)
    assert "invalid --status" in message
    for token in ("running", "crashloopbackoff", "init:<a>/<b>", "init:*", "failed"):
        assert token in message


def test_invalid_status_is_an_invalid_query():
    assert issubclass(InvalidStatusError, InvalidQueryError)


def test_exact_column_match_is_case_insensitive():
    running = normalize_status("running")

    assert status_matches(running, _record("job-a  RUNNING  gpu-node-1"))
    assert status_matches(running, _record("job-b  running  gpu-node-2"))
    assert not status_matches(running, _record("job-c  Pending  -"))


def test_substring_fallback_covers_init_states():
    record = _record("mpi-1  Init:1/3  2m")

    assert status_matches(normalize_status("init:1/3"), record)
    assert not status_matches(normalize_status("init:2/3"), record)
    assert status_matches(normalize_status("init:*"), record)


def test_any_init_matches_any_init_token():
    any_init = normalize_status("init:*")

    assert status_matches(any_init, _record("mpi-2  Init:Error  1m"))
    assert status_matches(any_init, _record("mpi-3  init:CrashLoopBackOff  1m"))
    assert not status_matches(any_init, _record("mpi-4  Running  1m"))


def test_status_is_not_matched_against_the_job_name():
    assert not status_matches(normalize_status("error"), _record("error-test  Running"))


def test_all_matches_everything():
    assert status_matches(ALL, _record("whatever"))
