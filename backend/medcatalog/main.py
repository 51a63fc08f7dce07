"""Medicine Catalog API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map MedCatalogError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Three error handler layers (domain, validation, catch-all) live in
      api/error_handlers.py
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import medcatalog.infrastructure.database as db_module
from medcatalog.infrastructure.database import init_db
from medcatalog.infrastructure.observability import setup_logging
from medcatalog.config import get_settings
from medcatalog.api.error_handlers import register_error_handlers
from medcatalog.api.routes import catalog_stats, health, medicines

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Medicine catalog API started")
    yield
    if db_module.db_manager:
        await db_module.db_manager.dispose()
    logger.info("Medicine catalog API shutting down")


app = FastAPI(
    title="Medicine Catalog API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(medicines.router)
app.include_router(catalog_stats.router)

register_error_handlers(app)
