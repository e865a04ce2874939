from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .filters import parse_int

WORD_FIELDS = ("word", "category", "numLetters", "numSyllables", "hint")


@dataclass(frozen=True)
class MissingFields:
    fields: List[str]

    @property
    def message(self) -> str:
        return f"Missing required fields: {', '.join(self.fields)}"


def validate_required_fields(data: Mapping[str, Any], required_fields: Sequence[str]) -> Optional[MissingFields]:
    """Return the fields that are absent, None or falsy, or None if all are set."""
    missing = [field for field in required_fields if not data.get(field)]
    if missing:
        return MissingFields(fields=missing)
    return None


def _lower_if_str(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def validate_and_transform_word_data(data: Mapping[str, Any]) -> Dict[str, Any]:
    num_letters = data.get("numLetters")
    num_syllables = data.get("numSyllables")

    return {
        "word": _lower_if_str(data.get("word")),
        "category": _lower_if_str(data.get("category")),
        "numLetters": parse_int(num_letters) if num_letters else None,
        "numSyllables": parse_int(num_syllables) if num_syllables else None,
        "hint": data.get("hint"),
    }

