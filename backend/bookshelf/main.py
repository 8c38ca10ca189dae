"""Bookshelf API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map BookshelfError to structured JSON responses
    - CORS configured from settings (not hardcoded)
    - The DatabaseSessionManager is created in the lifespan and kept on app.state
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bookshelf.api.error_handlers import register_error_handlers
from bookshelf.api.routes import books, health
from bookshelf.config import get_settings
from bookshelf.infrastructure.database import DatabaseSessionManager
from bookshelf.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Bookshelf API started")
    yield
    logger.info("Bookshelf API shutting down")
    await app.state.db_manager.dispose()


def create_app() -> FastAPI:
    settings = get_settings()
    application = FastAPI(
        title="Bookshelf API", version="1.0.0", lifespan=lifespan,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.include_router(health.router)
    application.include_router(books.router)
    register_error_handlers(application)
    return application


app = create_app()
