from fastapi import APIRouter

from ..core.pipeline import Pipeline
from .handlers import list_categories


def build_router(pipeline: Pipeline) -> APIRouter:
    router = APIRouter(prefix="/categories", tags=["categories"])
    router.add_api_route("", pipeline.get(list_categories), methods=["GET", "OPTIONS"])
    return router
