import pytest
from pydantic import ValidationError

from wordgamedb.api.handlers import WordCreate, WordUpdate
from wordgamedb.core.validation import WORD_FIELDS, validate_and_transform_word_data, validate_required_fields

VALID = {
    "word": "apple",
    "category": "fruit",
    "numLetters": 5,
    "numSyllables": 2,
    "hint": "Keeps the doctor away",
}


def test_no_error_when_all_fields_present():
    assert validate_required_fields(VALID, WORD_FIELDS) is None


def test_missing_fields_are_named_in_order():
    missing = validate_required_fields({"word": "apple"}, WORD_FIELDS)
    assert missing.fields == ["category", "numLetters", "numSyllables", "hint"]
    assert missing.message == "Missing required fields: category, numLetters, numSyllables, hint"


def test_empty_string_counts_as_missing():
    missing = validate_required_fields({**VALID, "word": ""}, WORD_FIELDS)
    assert missing.fields == ["word"]


def test_none_and_zero_count_as_missing():
    missing = validate_required_fields({**VALID, "hint": None, "numLetters": 0}, WORD_FIELDS)
    assert missing.fields == ["numLetters", "hint"]


def test_transform_normalizes_values():
    data = {"word": "APPLE", "category": "FRUIT", "numLetters": "5", "numSyllables": "2", "hint": "h"}
    assert validate_and_transform_word_data(data) == {
        "word": "apple",
        "category": "fruit",
        "numLetters": 5,
        "numSyllables": 2,
        "hint": "h",
    }


def test_transform_passes_non_strings_through():
    data = {"word": 123, "category": None, "hint": "h"}
    result = validate_and_transform_word_data(data)
    assert result["word"] == 123
    assert result["category"] is None


def test_transform_leaves_missing_numbers_unset():
    result = validate_and_transform_word_data({"word": "Pear"})
    assert result == {
        "word": "pear",
        "category": None,
        "numLetters": None,
        "numSyllables": None,
        "hint": None,
    }



# ---------- Request models ----------

def test_word_create_accepts_transformed_data():
    payload = WordCreate.model_validate(validate_and_transform_word_data({**VALID, "word": "APPLE", "numLetters": "5"}))
    assert payload.model_dump() == {
        "word": "apple",
        "category": "fruit",
        "num_letters": 5,
        "num_syllables": 2,
        "hint": "Keeps the doctor away",
    }


def test_word_create_names_invalid_fields_by_api_name():
    data = validate_and_transform_word_data({**VALID, "numLetters": "lots", "word": 42})
    with pytest.raises(ValidationError) as exc_info:
        WordCreate.model_validate(data)
    assert [err["loc"][0] for err in exc_info.value.errors()] == ["word", "numLetters"]


@pytest.mark.parametrize("count", [0, -4, 2**63, "99999999999999999999"])
def test_word_create_counts_must_fit_a_positive_db_integer(count):
    with pytest.raises(ValidationError):
        WordCreate.model_validate({**VALID, "numSyllables": count})


def test_word_update_keeps_only_supplied_fields():
    payload = WordUpdate.model_validate({"hint": "New hint", "category": "TREE"})
    assert payload.model_dump(exclude_none=True) == {"category": "tree", "hint": "New hint"}


def test_word_update_ignores_empty_and_unparseable_values():
    payload = WordUpdate.model_validate({"word": "", "numLetters": "abc", "hint": None})
    assert payload.model_dump(exclude_none=True) == {}


def test_word_update_rejects_blank_text():
    with pytest.raises(ValidationError) as exc_info:
        WordUpdate.model_validate({"word": "   "})
    assert exc_info.value.errors()[0]["loc"] == ("word",)
