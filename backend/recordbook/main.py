"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recordbook.config import get_settings
from recordbook.infrastructure.database import Base, engine
from recordbook.infrastructure.location import get_location_directory
from recordbook.infrastructure.logging.log_config import setup_logging
from recordbook.presentation.api.endpoints.health import router as health_router
from recordbook.presentation.api.errors import setup_error_handling
from recordbook.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — create tables and load reference data."""
    settings = get_settings()
    setup_logging()

    # 1. Create the records table if missing
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # 2. Load the state/district table once; every request shares it read-only
    directory = get_location_directory()

    logger.info(
        "%s %s started (env=%s, database=%s, states=%d)",
        settings.app_title,
        settings.app_version,
        settings.app_env,
        settings.database_label,
        len(directory.states()),
    )

    yield

    # Shutdown
    await engine.dispose()
    logger.info("Shut down gracefully")


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
        debug=False,
    )

    setup_error_handling(app)

    # CORS middleware, outermost
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "recordbook.main:app",
        host="0.0.0.0",
        port=get_settings().port,
        reload=get_settings().is_development,
    )
