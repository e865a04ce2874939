"""
Query-parameter filters for the words collection.

``build_word_filter`` only knows about a generic filter shape:

    {"category": "fruit", "numLetters": {"gte": 4, "lte": 8}}

``apply_word_filter`` is the single place that turns that shape into
SQLAlchemy conditions.
"""

from __future__ import annotations

import math
import re
from typing import Any, Dict, Mapping, Optional

from sqlalchemy.orm import Query

from ..models import Word

DEFAULT_LIMIT = 10
DEFAULT_OFFSET = 0

RangeFilter = Dict[str, int]
WordFilter = Dict[str, Any]

_LEADING_INT = re.compile(r"[+-]?\d+")

# Signed 64-bit, the widest integer the datastore column holds
MIN_DB_INT = -(2**63)
MAX_DB_INT = 2**63 - 1

# API field name -> model column
FILTER_COLUMNS = {
    "_id": Word.id,
    "category": Word.category,
    "numLetters": Word.num_letters,
    "numSyllables": Word.num_syllables,
}


def parse_int(value: Any) -> Optional[int]:
    """
    Parse the leading integer of ``value``.

    Whitespace around the value is ignored and trailing junk is dropped, so
    "7abc" gives 7 and "5.9" gives 5. Returns None when there are no leading
    digits at all.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    m = _LEADING_INT.match(str(value).strip())
    if not m:
        return None
    return int(m.group(0))


def parse_query_int(value: Any) -> Optional[int]:
    """Like ``parse_int``, but values the datastore cannot hold count as unparseable."""
    number = parse_int(value)
    if number is None or not MIN_DB_INT <= number <= MAX_DB_INT:
        return None
    return number


def create_range_filter(min_value: Optional[str], max_value: Optional[str]) -> Optional[RangeFilter]:
    low = parse_query_int(min_value) if min_value else None
    high = parse_query_int(max_value) if max_value else None

    if low is None and high is None:
        return None

    range_filter: RangeFilter = {}
    if low is not None:
        range_filter["gte"] = low
    if high is not None:
        range_filter["lte"] = high
    return range_filter


def _numeric_filter(
    params: Mapping[str, str],
    exact_key: str,
    min_key: str,
    max_key: str,
) -> Optional[Any]:
    exact = parse_query_int(params.get(exact_key)) if params.get(exact_key) else None
    if exact is not None and exact > 0:
        return exact
    return create_range_filter(params.get(min_key), params.get(max_key))


def build_word_filter(params: Mapping[str, str]) -> WordFilter:
    word_filter: WordFilter = {}

    category = (params.get("category") or "").strip().lower()
    if category:
        word_filter["category"] = category

    word_id = (params.get("_id") or "").strip()
    if word_id:
        word_filter["_id"] = word_id

    letters = _numeric_filter(params, "numLetters", "minLetters", "maxLetters")
    if letters is not None:
        word_filter["numLetters"] = letters

    syllables = _numeric_filter(params, "numSyllables", "minSyllables", "maxSyllables")
    if syllables is not None:
        word_filter["numSyllables"] = syllables

    return word_filter


def extract_pagination_params(params: Mapping[str, str]) -> Dict[str, int]:
    limit = parse_query_int(params.get("limit"))
    offset = parse_query_int(params.get("offset"))

    return {
        "limit": DEFAULT_LIMIT if limit is None else limit,
        "offset": DEFAULT_OFFSET if offset is None else offset,
    }


def apply_word_filter(query: Query, word_filter: Mapping[str, Any]) -> Query:
    for field, value in word_filter.items():
        column = FILTER_COLUMNS[field]
        if isinstance(value, dict):
            if "gte" in value:
                query = query.filter(column >= value["gte"])
            if "lte" in value:
                query = query.filter(column <= value["lte"])
        else:
            query = query.filter(column == value)
    return query
