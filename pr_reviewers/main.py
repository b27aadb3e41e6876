"""PR Reviewers API — FastAPI application and server entry point.

Invariants:
    - Routers registered explicitly: health, pull request merge
    - Logging configured and the engine created in the lifespan, engine disposed on exit
    - Errors leaving a route are rendered by api/error_handlers.py
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pr_reviewers.api.error_handlers import register_error_handlers
from pr_reviewers.api.routes import health, pull_request_merge
from pr_reviewers.config import get_settings
from pr_reviewers.infrastructure import database
from pr_reviewers.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_recycle=settings.database_pool_recycle,
    )
    logger.info(f"Merge service ready (terminal status {settings.merged_status_value})")
    try:
        yield
    finally:
        if database.db_manager is not None:
            await database.db_manager.dispose()
        logger.info("Merge service stopped")


def create_app() -> FastAPI:
    settings = get_settings()
    application = FastAPI(
        title="PR Reviewers API", version=health.SERVICE_VERSION, lifespan=lifespan,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    application.include_router(health.router)
    application.include_router(pull_request_merge.router)
    register_error_handlers(application)
    return application


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        app, host=settings.host, port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
