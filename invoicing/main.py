"""Invoicing API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map InvoicingError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py and are registered once here
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from invoicing.api.error_handlers import register_error_handlers
from invoicing.api.routes import clients, dashboard, health, invoices
from invoicing.config import get_settings
from invoicing.infrastructure import database
from invoicing.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(settings)
    logger.info(
        "Invoicing API started",
        extra={"operation": "startup"},
    )
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("Invoicing API shutting down")


app = FastAPI(
    title="Invoicing API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(invoices.router)
app.include_router(clients.router)
app.include_router(dashboard.router)

register_error_handlers(app)
