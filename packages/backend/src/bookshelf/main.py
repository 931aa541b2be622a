"""FastAPI application factory.

Learn: create_app() returns a configured FastAPI instance. Lifespan
handles startup/shutdown (tables, engine disposal). Middleware, CORS and
routers are all registered here; the bundled client build is mounted last
so it can never shadow /graphql or /api.
"""

from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from bookshelf import __version__
from bookshelf.api import api_router, graphql_router
from bookshelf.config import settings
from bookshelf.middleware.request_id import RequestIdMiddleware

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    from bookshelf.db.engine import create_tables, engine

    logger.info(
        "bookshelf.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    if settings.create_tables_on_startup:
        await create_tables(engine)
        logger.info("bookshelf.tables_ready")

    logger.info("bookshelf.graphql_ready", path="/graphql")

    yield

    logger.info("bookshelf.shutdown")
    await engine.dispose()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="Bookshelf",
        description="Book search account service — signup, login and saved books over GraphQL",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    app.include_router(graphql_router, prefix="/graphql")

    client_dir = Path(settings.client_build_dir)
    if settings.is_production and client_dir.is_dir():
        app.mount("/", StaticFiles(directory=client_dir, html=True), name="client")
        logger.info("bookshelf.serving_client", directory=str(client_dir))

    return app


# Default app instance (used by uvicorn: bookshelf.main:app)
app = create_app()
