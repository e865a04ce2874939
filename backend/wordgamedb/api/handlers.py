"""Handlers shared by the v1 and v2 route trees."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from starlette.responses import Response

from ..core.filters import MAX_DB_INT, apply_word_filter, build_word_filter, extract_pagination_params, parse_int
from ..core.pipeline import ApiRequest
from ..core.responses import error_response, json_response
from ..core.search import build_search_pattern
from ..core.validation import WORD_FIELDS, validate_and_transform_word_data, validate_required_fields
from ..models import Word

logger = logging.getLogger(__name__)

LIST_CACHE_SECONDS = 300
WORD_CACHE_SECONDS = 600
CATEGORIES_CACHE_SECONDS = 900


# ---------- Schemas ----------

def _lowercase(v: Any) -> Any:
    return v.lower() if isinstance(v, str) else v


def _leading_int(v: Any) -> Any:
    # Unparseable counts become None, which the int field then rejects
    return parse_int(v) if v else None


def _not_blank(v: Optional[str]) -> Optional[str]:
    if v is not None and not v.strip():
        raise ValueError("must not be blank")
    return v


class WordCreate(BaseModel):
    word: str
    category: str
    num_letters: int = Field(alias="numLetters", gt=0, le=MAX_DB_INT)
    num_syllables: int = Field(alias="numSyllables", gt=0, le=MAX_DB_INT)
    hint: str

    @field_validator("word", "category", mode="before")
    @classmethod
    def lowercase_text(cls, v: Any) -> Any:
        return _lowercase(v)

    @field_validator("num_letters", "num_syllables", mode="before")
    @classmethod
    def parse_counts(cls, v: Any) -> Any:
        return _leading_int(v)

    @field_validator("word", "category", "hint")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        return _not_blank(v)


class WordUpdate(BaseModel):
    """
    Partial update. Empty values and counts without leading digits mean
    "leave this field alone" and come out as None.
    """

    word: Optional[str] = None
    category: Optional[str] = None
    num_letters: Optional[int] = Field(default=None, alias="numLetters", gt=0, le=MAX_DB_INT)
    num_syllables: Optional[int] = Field(default=None, alias="numSyllables", gt=0, le=MAX_DB_INT)
    hint: Optional[str] = None

    @field_validator("word", "category", mode="before")
    @classmethod
    def lowercase_text(cls, v: Any) -> Any:
        return _lowercase(v) if v else None

    @field_validator("hint", mode="before")
    @classmethod
    def empty_hint(cls, v: Any) -> Any:
        return v if v else None

    @field_validator("num_letters", "num_syllables", mode="before")
    @classmethod
    def parse_counts(cls, v: Any) -> Any:
        return _leading_int(v)

    @field_validator("word", "category", "hint")
    @classmethod
    def reject_blank(cls, v: Optional[str]) -> Optional[str]:
        return _not_blank(v)


class WordOut(BaseModel):
    id: str = Field(serialization_alias="_id")
    word: str
    category: str
    num_letters: int = Field(serialization_alias="numLetters")
    num_syllables: int = Field(serialization_alias="numSyllables")
    hint: str
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    class Config:
        from_attributes = True


def word_to_dict(w: Word) -> Dict[str, Any]:
    return WordOut.model_validate(w).model_dump(mode="json", by_alias=True)


# ---------- Helpers ----------

def _word_not_found() -> Response:
    return error_response("Word not found", 404)


def _word_exists() -> Response:
    return error_response("Word already exists", 409)


def _invalid_fields(exc: ValidationError) -> Response:
    fields: List[str] = []
    for err in exc.errors():
        name = str(err["loc"][0]) if err["loc"] else "body"
        if name not in fields:
            fields.append(name)
    return error_response(f"Invalid fields: {', '.join(fields)}", 400)


def _read_json_object(request: ApiRequest) -> Tuple[Optional[Dict[str, Any]], Optional[Response]]:
    try:
        body = request.json()
    except ValueError:
        return None, error_response("Request body must be valid JSON", 400)
    if not isinstance(body, dict):
        return None, error_response("Request body must be a JSON object", 400)
    return body, None


def _paginated(words: List[Word], total: int, limit: int, offset: int) -> Dict[str, Any]:
    return {
        "words": [word_to_dict(w) for w in words],
        "pagination": {
            "total": total,
            "limit": limit,
            "offset": offset,
            "hasMore": offset + limit < total,
        },
    }


def _filtered_words(request: ApiRequest, db: Session):
    word_filter = build_word_filter(request.params)
    return apply_word_filter(db.query(Word), word_filter)


# ---------- Read endpoints ----------

def list_categories(request: ApiRequest, db: Session) -> Response:
    categories = sorted(c for (c,) in db.query(Word.category).distinct().all())
    return json_response(categories, cache_seconds=CATEGORIES_CACHE_SECONDS)


def get_config(request: ApiRequest, db: Session, *, destructive_enabled: bool) -> Response:
    return json_response({"destructiveEndpointsEnabled": destructive_enabled})


def list_words_v1(request: ApiRequest, db: Session) -> Response:
    words = (
        _filtered_words(request, db)
        .order_by(Word.created_at.desc(), Word.id.desc())
        .all()
    )
    return json_response([word_to_dict(w) for w in words], cache_seconds=LIST_CACHE_SECONDS)


def list_words_v2(request: ApiRequest, db: Session) -> Response:
    page = extract_pagination_params(request.params)
    q = _filtered_words(request, db)

    total = q.count()
    words = (
        q.order_by(Word.created_at.desc(), Word.id.desc())
        .offset(page["offset"])
        .limit(page["limit"])
        .all()
    )
    return json_response(
        _paginated(words, total, page["limit"], page["offset"]),
        cache_seconds=LIST_CACHE_SECONDS,
    )


def search_words(request: ApiRequest, db: Session, *, min_length: int = 2) -> Response:
    query = (request.params.get("q") or "").strip()
    if not query:
        return error_response('Query parameter "q" is required', 400)
    if len(query) < min_length:
        return error_response(f"Search query must be at least {min_length} characters long", 400)

    page = extract_pagination_params(request.params)
    q = db.query(Word).filter(Word.word.regexp_match(build_search_pattern(query)))

    total = q.count()
    words = q.order_by(Word.word).offset(page["offset"]).limit(page["limit"]).all()

    return json_response(
        {**_paginated(words, total, page["limit"], page["offset"]), "query": query},
        cache_seconds=LIST_CACHE_SECONDS,
    )


def random_word(request: ApiRequest, db: Session) -> Response:
    w = _filtered_words(request, db).order_by(func.random()).first()
    if not w:
        return error_response("No words found matching criteria", 404)
    return json_response(word_to_dict(w))


def get_word(request: ApiRequest, db: Session) -> Response:
    w = db.query(Word).filter(Word.id == request.path_params["word_id"]).first()
    if not w:
        return _word_not_found()
    return json_response(word_to_dict(w), cache_seconds=WORD_CACHE_SECONDS)


# ---------- Write endpoints ----------

def create_word(request: ApiRequest, db: Session) -> Response:
    body, error = _read_json_object(request)
    if error:
        return error

    missing = validate_required_fields(body, WORD_FIELDS)
    if missing:
        return error_response(missing.message, 400)

    try:
        payload = WordCreate.model_validate(validate_and_transform_word_data(body))
    except ValidationError as exc:
        return _invalid_fields(exc)

    # Enforce unique word text; the unique constraint catches races
    existing = db.query(Word).filter(Word.word == payload.word).first()
    if existing:
        return _word_exists()

    w = Word(**payload.model_dump())
    db.add(w)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("Duplicate word %r rejected by unique constraint", payload.word)
        return _word_exists()
    db.refresh(w)

    logger.info("Created word %r (%s)", w.word, w.id)
    return json_response(word_to_dict(w), status_code=201)


def update_word(request: ApiRequest, db: Session) -> Response:
    word_id = request.path_params["word_id"]
    body, error = _read_json_object(request)
    if error:
        return error

    try:
        payload = WordUpdate.model_validate(body)
    except ValidationError as exc:
        return _invalid_fields(exc)
    data = payload.model_dump(exclude_none=True)

    w = db.query(Word).filter(Word.id == word_id).first()
    if not w:
        return _word_not_found()

    if "word" in data:
        existing = db.query(Word).filter(Word.word == data["word"], Word.id != word_id).first()
        if existing:
            return _word_exists()

    if data:
        for field, value in data.items():
            setattr(w, field, value)
        w.updated_at = datetime.utcnow()

        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            return _word_exists()
        db.refresh(w)

    return json_response(word_to_dict(w))


def delete_word(request: ApiRequest, db: Session) -> Response:
    w = db.query(Word).filter(Word.id == request.path_params["word_id"]).first()
    if not w:
        return _word_not_found()

    word_text, word_id = w.word, w.id
    db.delete(w)
    db.commit()
    logger.info("Deleted word %r (%s)", word_text, word_id)
    return json_response({"message": "Word deleted successfully"})
