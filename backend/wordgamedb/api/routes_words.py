from functools import partial

from fastapi import APIRouter

from ..core.pipeline import Pipeline
from .handlers import (
    create_word,
    delete_word,
    get_word,
    list_words_v1,
    list_words_v2,
    random_word,
    search_words,
    update_word,
)


def build_router(pipeline: Pipeline, version: str = "v2") -> APIRouter:
    """
    /words routes for one API version.

    v1 lists words as a plain array, v2 wraps them with pagination metadata.
    Everything else is shared.
    """
    router = APIRouter(prefix="/words", tags=["words"])

    list_handler = list_words_v1 if version == "v1" else list_words_v2
    search_handler = partial(search_words, min_length=pipeline.settings.search_min_length)

    router.add_api_route("", pipeline.get(list_handler), methods=["GET", "OPTIONS"])
    router.add_api_route("", pipeline.post(create_word), methods=["POST"])

    # Fixed paths first so they are not captured by /{word_id}
    router.add_api_route("/random", pipeline.get(random_word), methods=["GET", "OPTIONS"])
    router.add_api_route("/search", pipeline.get(search_handler), methods=["GET", "OPTIONS"])

    router.add_api_route("/{word_id}", pipeline.get(get_word), methods=["GET", "OPTIONS"])
    router.add_api_route("/{word_id}", pipeline.put(update_word), methods=["PUT"])
    router.add_api_route("/{word_id}", pipeline.delete(delete_word), methods=["DELETE"])

    return router
