from functools import partial

from fastapi import APIRouter

from ..core.pipeline import Pipeline
from .handlers import get_config


def build_router(pipeline: Pipeline) -> APIRouter:
    router = APIRouter(prefix="/config", tags=["config"])
    handler = partial(get_config, destructive_enabled=pipeline.destructive_enabled)
    router.add_api_route("", pipeline.get(handler), methods=["GET", "OPTIONS"])
    return router
