"""Application factory for the reservation backend.

Builds the FastAPI app: error handlers, CORS, the reservation and table
routers, the liveness route and the startup/shutdown hooks. Tests build
their own app through ``create_app(run_checks=False)``.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import Settings, get_settings
from core.exceptions import register_exception_handlers
from core.query_logger import query_logger_instance
from modules.reservations.routes import router as reservations_router
from modules.tables.routes import router as tables_router

LOGGER = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, run_checks: bool = True) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: settings to build with; defaults to the cached settings.
        run_checks: run the startup validation on the startup event.
    """

    settings = settings or get_settings()

    app = FastAPI(
        title="Restaurant Reservations API",
        description="Reservations, tables and seating for a single restaurant.",
        version="1.0.0",
        debug=settings.debug,
    )

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(reservations_router)
    app.include_router(tables_router)

    @app.get("/", tags=["health"])
    def read_root() -> dict[str, str]:
        return {"message": "Restaurant reservations backend is running"}

    @app.on_event("startup")
    def startup_event():
        """Validate configuration and storage before serving requests"""
        if run_checks:
            from app.startup import run_startup_checks

            run_startup_checks()
        query_logger_instance.reset_stats()

    @app.on_event("shutdown")
    def shutdown_event():
        query_logger_instance.log_query_stats()
        LOGGER.info("Reservation backend stopped")

    return app
