import re

import pytest

from wordgamedb.core.search import build_search_pattern, escape_regex


@pytest.mark.parametrize("value", ["", "apple", "hello world", "don't-stop", "naïve"])
def test_safe_strings_are_unchanged(value):
    assert escape_regex(value) == value


def test_every_metacharacter_is_escaped():
    specials = ".*+?^${}()|[]\\"
    escaped = escape_regex(specials)
    assert escaped == "".join("\\" + c for c in specials)
    assert re.fullmatch(escaped, specials)


def test_escaped_pattern_matches_literally():
    assert re.search(escape_regex("a.c"), "abc") is None
    assert re.search(escape_regex("a.c"), "xa.cx")


def test_catastrophic_pattern_is_neutralised():
    pattern = escape_regex("(a+)+$")
    assert re.search(pattern, "a" * 40 + "!") is None
    assert re.search(pattern, "x(a+)+$") is not None


def test_search_pattern_is_case_insensitive_partial_match():
    pattern = build_search_pattern("AP")
    assert pattern == "(?i)ap"
    assert re.search(pattern, "grape")
    assert re.search(pattern, "APPLE")
    assert not re.search(pattern, "banana")
