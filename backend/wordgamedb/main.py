import logging
from typing import Optional

from fastapi import APIRouter, FastAPI, Request

from .api import routes_categories, routes_config, routes_words
from .api.routes_status import router as status_router
from .config import Settings, settings as default_settings
from .core.database import Database
from .core.pipeline import Pipeline
from .core.responses import SECURITY_HEADERS
from .core.seed import seed_initial_data

API_VERSIONS = ("v1", "v2")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def build_api_router(pipeline: Pipeline, version: str) -> APIRouter:
    router = APIRouter(prefix=f"/api/{version}")
    router.include_router(routes_words.build_router(pipeline, version))
    router.include_router(routes_categories.build_router(pipeline))
    router.include_router(routes_config.build_router(pipeline))
    return router


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)

    database = Database(settings)
    pipeline = Pipeline(settings, database)

    app = FastAPI(
        title=settings.app_name,
        version="2.0.0",
    )
    app.state.settings = settings
    app.state.database = database

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response = await call_next(request)
        for key, value in SECURITY_HEADERS.items():
            response.headers.setdefault(key, value)
        return response

    @app.on_event("startup")
    def startup_event():
        if not settings.seed_sample_words:
            return
        # Seed if empty
        db = database.session()
        try:
            seed_initial_data(db)
        finally:
            db.close()

    @app.on_event("shutdown")
    def shutdown_event():
        database.dispose()

    app.include_router(status_router)
    for version in API_VERSIONS:
        app.include_router(build_api_router(pipeline, version))

    return app


app = create_app()
