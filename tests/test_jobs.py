import pytest

from runaiops.core.errors import InvalidQueryError
from runaiops.core.jobs import list_candidates, parse_job_table, strip_ansi
from runaiops.core.status import normalize_status

LISTING = (
    "\x1b[1mNAME            STATUS     AGE   NODE\x1b[0m\n"
    "train-a         \x1b[32mRUNNING\x1b[0m    2d    node-1\n"
    "train-b         Pending    1h    -\n"
    "\n"
    "eval-a          Succeeded  3d    node-2\n"
    "train-c         running    5m    node-3\n"
    "mpi-launch      Init:1/3   1m    node-4\n"
)


class _ListingStub:
    def __init__(self, text: str):
        self.text = text
        self.calls: list[bool] = []

    def list_jobs(self, include_all: bool = False) -> str:
        self.calls.append(include_all)
        return self.text


def test_strip_ansi_removes_color_codes():
    assert strip_ansi("\x1b[1;32mRUNNING\x1b[0m") == "RUNNING"


def test_parse_job_table_skips_header_and_blank_lines():
    records = parse_job_table(LISTING)

    assert [r.name for r in records] == [
        "train-a",
        "train-b",
        "eval-a",
        "train-c",
        "mpi-launch",
    ]
    assert records[0].fields == ("train-a", "RUNNING", "2d", "node-1")
    assert records[0].status_text == "RUNNING 2d node-1"


@pytest.mark.parametrize("text", ["", "NAME STATUS\n", "\n\n"])
def test_parse_job_table_empty_output(text):
    assert parse_job_table(text) == []


def test_list_candidates_filters_by_name_regex():
    stub = _ListingStub(LISTING)

    names = list(list_candidates(stub, "^train-"))

    assert names == ["train-a", "train-b", "train-c"]
    assert stub.calls == [False]


def test_list_candidates_filters_by_status_case_insensitively():
    stub = _ListingStub(LISTING)

    names = list(list_candidates(stub, "^train-", normalize_status("running")))

    assert names == ["train-a", "train-c"]


def test_list_candidates_any_init():
    stub = _ListingStub(LISTING)

    assert list(list_candidates(stub, ".", normalize_status("init:*"))) == [
        "mpi-launch"
    ]


def test_list_candidates_forwards_include_all():
    stub = _ListingStub(LISTING)

    list(list_candidates(stub, "eval", include_all=True))

    assert stub.calls == [True]


def test_list_candidates_no_match_is_empty():
    stub = _ListingStub(LISTING)

    assert list(list_candidates(stub, "^nothing-")) == []


def test_list_candidates_invalid_regex_fails_before_listing():
    stub = _ListingStub(LISTING)

    with pytest.raises(InvalidQueryError, match="Invalid regex"):
        list_candidates(stub, "([unclosed")

    assert stub.calls == []
