import pytest

from wordgamedb.core.filters import (
    build_word_filter,
    create_range_filter,
    extract_pagination_params,
    parse_int,
    parse_query_int,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("5", 5),
        (" 12 ", 12),
        ("7abc", 7),
        ("5.9", 5),
        ("-3", -3),
        ("abc", None),
        ("", None),
        (None, None),
        (4, 4),
    ],
)
def test_parse_int(value, expected):
    assert parse_int(value) == expected


def test_range_filter_none_when_both_missing():
    assert create_range_filter(None, None) is None
    assert create_range_filter("", "") is None
    assert create_range_filter("abc", "xyz") is None


def test_range_filter_min_only():
    assert create_range_filter("5", None) == {"gte": 5}


def test_range_filter_max_only():
    assert create_range_filter(None, "10") == {"lte": 10}
    assert create_range_filter("", "10") == {"lte": 10}


def test_range_filter_both():
    assert create_range_filter("5", "10") == {"gte": 5, "lte": 10}


def test_range_filter_drops_unparseable_side():
    assert create_range_filter("nope", "10") == {"lte": 10}
    assert create_range_filter("3", "nope") == {"gte": 3}


def test_empty_params_give_empty_filter():
    assert build_word_filter({}) == {}


def test_category_is_trimmed_and_lowercased():
    assert build_word_filter({"category": "  Fruit "}) == {"category": "fruit"}


def test_id_is_trimmed_but_keeps_case():
    assert build_word_filter({"_id": " 5FFA1774c0 "}) == {"_id": "5FFA1774c0"}


def test_blank_category_is_ignored():
    assert build_word_filter({"category": "   "}) == {}


def test_letter_and_syllable_ranges():
    params = {
        "category": "animal",
        "minLetters": "4",
        "maxLetters": "8",
        "minSyllables": "2",
    }
    assert build_word_filter(params) == {
        "category": "animal",
        "numLetters": {"gte": 4, "lte": 8},
        "numSyllables": {"gte": 2},
    }


def test_exact_value_beats_range():
    params = {
        "numLetters": "6",
        "minLetters": "1",
        "maxLetters": "3",
        "numSyllables": "2",
        "maxSyllables": "9",
    }
    result = build_word_filter(params)
    assert result["numLetters"] == 6
    assert result["numSyllables"] == 2


@pytest.mark.parametrize("exact", ["abc", "0", "-2", ""])
def test_invalid_exact_value_falls_back_to_range(exact):
    params = {"numLetters": exact, "minLetters": "5"}
    assert build_word_filter(params) == {"numLetters": {"gte": 5}}


def test_unparseable_numbers_are_omitted():
    params = {"numLetters": "many", "minSyllables": "few"}
    assert build_word_filter(params) == {}


def test_pagination_defaults():
    assert extract_pagination_params({}) == {"limit": 10, "offset": 0}


def test_pagination_custom_values():
    assert extract_pagination_params({"limit": "20", "offset": "10"}) == {"limit": 20, "offset": 10}
    assert extract_pagination_params({"limit": "25"}) == {"limit": 25, "offset": 0}


def test_pagination_unparseable_values_use_defaults():
    assert extract_pagination_params({"limit": "abc", "offset": "xyz"}) == {"limit": 10, "offset": 0}


def test_parse_int_has_no_upper_bound():
    assert parse_int("99999999999999999999") == 99999999999999999999


@pytest.mark.parametrize(
    "value, expected",
    [
        ("9223372036854775807", 2**63 - 1),
        ("-9223372036854775808", -(2**63)),
        ("9223372036854775808", None),
        ("99999999999999999999", None),
        ("12", 12),
        ("abc", None),
    ],
)
def test_parse_query_int_stays_in_db_range(value, expected):
    assert parse_query_int(value) == expected


def test_out_of_range_numbers_are_treated_as_unparseable():
    huge = "99999999999999999999"
    assert build_word_filter({"numLetters": huge, "minLetters": "3", "maxSyllables": huge}) == {
        "numLetters": {"gte": 3},
    }
    assert extract_pagination_params({"limit": huge, "offset": "-" + huge}) == {"limit": 10, "offset": 0}
