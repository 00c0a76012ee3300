import re

import pytest

from tests.helpers.spamlet_imports import LinkValidator, LinkVerdict, VisitedSet


def _validator(**kwargs):
    kwargs.setdefault("allowed_domains", ["localhost:5173"])
    kwargs.setdefault("disallowed_filters", [re.compile(r"\?.*")])
    return LinkValidator(**kwargs)


def test_query_link_is_denied_and_plain_link_accepted():
    validator = _validator()
    visited = VisitedSet()

    assert validator.validate("http://localhost:5173/a?x=1", visited) is LinkVerdict.DENIED_BY_FILTER
    assert validator.validate("http://localhost:5173/b", visited) is LinkVerdict.ACCEPTED


def test_filter_wins_over_domain_and_visited_checks():
    validator = _validator(disallowed_filters=[r"/private"])
    visited = VisitedSet()
    visited.reserve("http://localhost:5173/private")

    verdict = validator.validate("http://localhost:5173/private", visited)

    assert verdict is LinkVerdict.DENIED_BY_FILTER
    assert not verdict.accepted


def test_visited_link_is_rejected_before_domain_check():
    validator = _validator(disallowed_filters=[])
    visited = VisitedSet()
    visited.reserve("http://elsewhere.com/")

    assert validator.validate("http://elsewhere.com/", visited) is LinkVerdict.ALREADY_VISITED


def test_only_first_allowed_domain_is_consulted():
    validator = _validator(allowed_domains=["localhost:5173", "example.com"], disallowed_filters=[])

    assert validator.validate("https://example.com/", VisitedSet()) is LinkVerdict.DOMAIN_NOT_ALLOWED


def test_domain_check_is_a_substring_match():
    validator = _validator(allowed_domains=["example.com"], disallowed_filters=[])

    assert validator.validate("https://docs.example.com/guide", VisitedSet()).accepted


def test_string_filters_are_compiled():
    validator = _validator(disallowed_filters=[r"#.*", re.compile(r"\.pdf$")])

    assert validator.validate("http://localhost:5173/#top", VisitedSet()) is LinkVerdict.DENIED_BY_FILTER
    assert validator.validate("http://localhost:5173/doc.pdf", VisitedSet()) is LinkVerdict.DENIED_BY_FILTER


def test_empty_allowed_domains_is_rejected():
    with pytest.raises(ValueError):
        LinkValidator(allowed_domains=[])


def test_visited_set_reserve_is_insert_if_absent():
    visited = VisitedSet()

    assert visited.reserve("http://a/") is True
    assert visited.reserve("http://a/") is False
    assert len(visited) == 1
    assert "http://a/" in visited


def test_empty_designated_domain_is_rejected():
    with pytest.raises(ValueError):
        LinkValidator(allowed_domains=["", "localhost:5173"])
