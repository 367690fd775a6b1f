"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from content_admin.config import get_settings
from content_admin.application.context import AppContext
from content_admin.application.services import (
    AuditWriter,
    FieldNameTranslator,
    build_default_registry,
)
from content_admin.infrastructure.database import engine
from content_admin.infrastructure.database.session import create_tables
from content_admin.infrastructure.dependencies import make_audit_sink
from content_admin.infrastructure.logging.log_config import setup_logging
from content_admin.presentation.api.errors import register_exception_handlers
from content_admin.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — create tables, build the context, run the audit writer."""
    settings = get_settings()
    setup_logging()

    # 1. Create all database tables
    await create_tables(engine)

    # 2. Build the process-wide context
    registry = build_default_registry()
    translator = FieldNameTranslator()
    audit_writer = AuditWriter(
        make_audit_sink(registry, translator),
        max_size=settings.audit_queue_size,
        drain_timeout=settings.audit_drain_timeout,
    )
    app.state.context = AppContext(
        settings=settings,
        registry=registry,
        translator=translator,
        audit_writer=audit_writer,
    )

    # 3. Start the audit writer
    await audit_writer.start()
    logger.info("Content admin API ready: %d resources", len(registry.keys()))

    yield

    # Shutdown: persist what is still queued before closing the pool
    await audit_writer.stop(drain=True)
    await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "content_admin.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
