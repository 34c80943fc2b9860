import pytest

from runaiops.core.errors import InvalidQueryError
from runaiops.core.jobs import JobRecord
from runaiops.core.selector_builder import build_selector
from runaiops.core.selectors import AndSelector, NameRegexSelector, StatusSelector
from runaiops.core.status import ALL, normalize_status


def _record(line: str) -> JobRecord:
    fields = tuple(line.split())
    return JobRecord(name=fields[0], fields=fields, text=line)


def test_name_regex_selector_matches():
    selector = NameRegexSelector("^train-")

    assert selector.matches(_record("train-a Running")) is True


def test_name_regex_selector_no_match():
    selector = NameRegexSelector("^train-")

    assert selector.matches(_record("eval-train-a Running")) is False


def test_name_regex_selector_rejects_invalid_regex():
    with pytest.raises(InvalidQueryError):
        NameRegexSelector("(")


def test_and_selector():
    record = _record("train-a Running")

    name_sel = NameRegexSelector("train")
    running = StatusSelector(normalize_status("running"))
    pending = StatusSelector(normalize_status("pending"))

    assert AndSelector([name_sel, running]).matches(record) is True
    assert AndSelector([name_sel, pending]).matches(record) is False


def test_build_selector_name_only():
    assert isinstance(build_selector(name="train"), NameRegexSelector)
    assert isinstance(build_selector(name="train", status=ALL), NameRegexSelector)


def test_build_selector_with_status():
    selector = build_selector(name="train", status=normalize_status("succeeded"))

    assert isinstance(selector, AndSelector)


def test_build_selector_requires_name():
    with pytest.raises(InvalidQueryError):
        build_selector(name=None)
