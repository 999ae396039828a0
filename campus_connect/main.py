"""Campus Connect API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CampusConnectError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from campus_connect.api.error_handlers import register_error_handlers
from campus_connect.infrastructure import database
from campus_connect.infrastructure.observability import setup_logging
from campus_connect.config import get_settings
from campus_connect.api.routes import (
    affiliation, colleges, health, posts, profiles,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Campus Connect API started")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("Campus Connect API shutting down")


app = FastAPI(
    title="Campus Connect API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(affiliation.router)
app.include_router(profiles.router)
app.include_router(colleges.router)
app.include_router(posts.router)

register_error_handlers(app)
