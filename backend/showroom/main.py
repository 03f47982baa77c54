"""Showroom API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ShowroomError to structured JSON responses
    - CORS and body size limit configured from settings (not hardcoded)
    - MongoDB connected on startup via lifespan; an unreachable server aborts startup

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - MongoClientManager stored on app.state and resolved per request through
      api/dependencies.py
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from showroom.api.body_limit import BodySizeLimitMiddleware
from showroom.api.error_handlers import register_error_handlers
from showroom.api.routes import categories, gallery, health, promo
from showroom.config import get_settings
from showroom.infrastructure.database import MongoClientManager
from showroom.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = MongoClientManager(
        settings.mongodb_uri,
        database_name=settings.mongodb_database,
        server_selection_timeout_ms=settings.mongodb_server_selection_timeout_ms,
        health_timeout_ms=settings.mongodb_health_timeout_ms,
    )
    try:
        await manager.connect()
    except Exception:
        logger.critical("MongoDB unreachable at startup", exc_info=True)
        await manager.close()
        raise
    app.state.mongo = manager
    logger.info("Showroom API started")
    yield
    logger.info("Showroom API shutting down")
    await manager.close()


app = FastAPI(
    title="Showroom API", version="1.0.0", lifespan=lifespan,
)

# Added last runs first: CORS wraps the body limit
settings = get_settings()
app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.max_body_bytes)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(categories.router)
app.include_router(promo.router)
app.include_router(gallery.router)

register_error_handlers(app)
