"""
Evidence Tracker API Server

Entry point for the FastAPI application.
"""

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from evidence_tracker import __version__
from evidence_tracker.api import router
from evidence_tracker.core.config import get_settings
from evidence_tracker.core.database import close_db, init_db
from evidence_tracker.core.errors import register_exception_handlers
from evidence_tracker.core.logging import configure_logging

settings = get_settings()
log = structlog.get_logger()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    configure_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title="Evidence Tracker",
        description="Team evidence submissions and their review workflow.",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(router)

    @app.on_event("startup")
    async def on_startup():
        log.info("evidence_tracker.starting", port=settings.port)
        if not settings.create_tables:
            return
        try:
            await init_db()
        except Exception as exc:
            # Stay up; each request reports the store failure on its own.
            log.error("evidence_tracker.store_unavailable", error=str(exc))
        else:
            log.info("evidence_tracker.tables_ready")

    @app.on_event("shutdown")
    async def on_shutdown():
        log.info("evidence_tracker.shutting_down")
        await close_db()

    return app


app = create_app()


def run() -> None:
    """CLI entry point: serve the API with uvicorn."""
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level)


if __name__ == "__main__":
    run()
