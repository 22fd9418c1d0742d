"""Project Catalog API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery — ExMA anti-pattern)
    - Global error handlers map CatalogError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database manager and CatalogContext built once in the lifespan, kept on app.state

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_app() factory so tests can build an app around their own context
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from project_catalog.api.error_handlers import register_error_handlers
from project_catalog.api.routes import data_availability, health, projects, zk_catalog
from project_catalog.config import Settings, get_settings
from project_catalog.infrastructure.database import DatabaseSessionManager
from project_catalog.infrastructure.observability import setup_logging
from project_catalog.services.catalog_context import build_context

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    app.state.db_manager = db_manager
    app.state.catalog = build_context(settings, db_manager)
    logger.info(
        f"Project Catalog API started (mock_mode={settings.mock_mode})",
    )
    yield
    await db_manager.dispose()
    logger.info("Project Catalog API shutting down")


def create_app(settings: Settings | None = None, use_lifespan: bool = True) -> FastAPI:
    """Build the FastAPI app; tests pass use_lifespan=False and set app.state themselves."""
    settings = settings or get_settings()
    app = FastAPI(
        title="Project Catalog API", version="1.0.0",
        lifespan=lifespan if use_lifespan else None,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    # Routes — explicit registration (ExMA: no convention-over-config)
    app.include_router(health.router)
    app.include_router(projects.router)
    app.include_router(data_availability.router)
    app.include_router(zk_catalog.router)
    return app


app = create_app()
